"""Exceptions raised by the Regress Kernel."""


class RegressKernelError(Exception):
    """Base class for all kernel errors."""
    pass


class DomainContractError(RegressKernelError):
    """
    A caller broke the finite-domain contract.

    Raised at setup when a function is not total over its domain, returns a
    value outside the expected range, or is queried outside the domain it
    was tabulated on.
    """
    pass


class UnderdeterminationError(RegressKernelError):
    """Raised when a scenario's underdetermination property does not hold as expected."""
    pass
