"""
Worldview, Observation Function and External Criterion.

Every function the kernel consumes is stored as its finite table of
outputs. Callables are accepted only through ``tabulate``, which evaluates
them once over the whole domain and fails loudly if they are not total.
"""

from typing import Callable, Dict, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, StrictBool, model_validator

from regress_kernel.errors import DomainContractError
from regress_kernel.models.domain import Entity, EntityDomain, Outcome

K = TypeVar("K")
V = TypeVar("V")


def _tabulate(
    what: str,
    values: List[K],
    fn: Callable[[K], V],
    expected: type,
) -> Dict[K, V]:
    """Evaluate fn on every value of a closed domain, enforcing totality and range."""
    table = {}
    for value in values:
        try:
            result = fn(value)
        except LookupError as exc:
            raise DomainContractError(f"{what} is not defined for {value}") from exc
        if not isinstance(result, expected):
            raise DomainContractError(
                f"{what} returned {result!r} for {value}, "
                f"expected {expected.__name__}"
            )
        table[value] = result
    return table


class ObservationFunction(BaseModel):
    """The fixed, given mapping from entities to their actually-produced outcomes."""

    model_config = ConfigDict(frozen=True)

    table: Dict[int, Outcome]       # entity id -> observed outcome

    @model_validator(mode="after")
    def _check_domain(self) -> "ObservationFunction":
        if not self.table:
            raise DomainContractError("Observation function must cover at least one entity")
        # size bound and id checks live on EntityDomain
        EntityDomain.from_ids(self.table.keys())
        return self

    @classmethod
    def tabulate(
        cls, domain: EntityDomain, fn: Callable[[Entity], Outcome]
    ) -> "ObservationFunction":
        table = _tabulate("Observation function", domain.enumerate(), fn, Outcome)
        return cls(table={e.id: o for e, o in table.items()})

    @property
    def domain(self) -> EntityDomain:
        """The entity domain this observation function is total over."""
        return EntityDomain.from_ids(self.table.keys())

    def observe(self, entity: Entity) -> Outcome:
        try:
            return self.table[entity.id]
        except KeyError:
            raise DomainContractError(f"No observation recorded for {entity}") from None

    def __call__(self, entity: Entity) -> Outcome:
        return self.observe(entity)

    def entities_observing(self, outcome: Outcome) -> List[Entity]:
        """The fiber of an outcome: every entity observed to produce it."""
        return [e for e in self.domain.enumerate() if self.table[e.id] == outcome]


class Worldview(BaseModel):
    """
    A paired assignment of a quality predicate over entities and a
    correctness predicate over outcomes.

    Any boolean assignment is a legal worldview; whether it is consistent
    with the evidence is decided by the checkers, not at construction.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    good: Dict[int, StrictBool]             # entity id -> judged good / reliable
    correct: Dict[Outcome, StrictBool]      # outcome -> judged correct

    @model_validator(mode="after")
    def _check_outcomes_total(self) -> "Worldview":
        missing = [o.value for o in Outcome.enumerate() if o not in self.correct]
        if missing:
            raise DomainContractError(
                f"Worldview '{self.name}' leaves correctness undefined for {missing}"
            )
        return self

    @classmethod
    def tabulate(
        cls,
        name: str,
        domain: EntityDomain,
        judges_good: Callable[[Entity], bool],
        judges_correct: Callable[[Outcome], bool],
    ) -> "Worldview":
        good = _tabulate(f"{name}.judges_good", domain.enumerate(), judges_good, bool)
        correct = _tabulate(
            f"{name}.judges_correct", Outcome.enumerate(), judges_correct, bool
        )
        return cls(name=name, good={e.id: g for e, g in good.items()}, correct=correct)

    def judges_good(self, entity: Entity) -> bool:
        try:
            return self.good[entity.id]
        except KeyError:
            raise DomainContractError(
                f"Worldview '{self.name}' has no quality judgment for {entity}"
            ) from None

    def judges_correct(self, outcome: Outcome) -> bool:
        return self.correct[outcome]

    def covers(self, domain: EntityDomain) -> bool:
        """Whether the quality predicate is defined on every entity of the domain."""
        return all(e.id in self.good for e in domain.enumerate())

    def complement(self, name: Optional[str] = None) -> "Worldview":
        """The exact boolean complement on both predicates."""
        return Worldview(
            name=name or f"not_{self.name}",
            good={i: not g for i, g in self.good.items()},
            correct={o: not c for o, c in self.correct.items()},
        )


class ExternalCriterion(BaseModel):
    """
    A quality judgment defined independently of the observation function.

    Structurally just an Entity -> bool table. Independence from the
    observations cannot be enforced by the type, so ``basis`` records what
    the judgment rests on (e.g. "pre-registered protocol audit").
    """

    model_config = ConfigDict(frozen=True)

    name: str
    basis: str
    table: Dict[int, StrictBool]

    @classmethod
    def tabulate(
        cls,
        name: str,
        basis: str,
        domain: EntityDomain,
        fn: Callable[[Entity], bool],
    ) -> "ExternalCriterion":
        table = _tabulate(name, domain.enumerate(), fn, bool)
        return cls(name=name, basis=basis, table={e.id: g for e, g in table.items()})

    def judges_good(self, entity: Entity) -> bool:
        try:
            return self.table[entity.id]
        except KeyError:
            raise DomainContractError(
                f"Criterion '{self.name}' has no judgment for {entity}"
            ) from None

    def __call__(self, entity: Entity) -> bool:
        return self.judges_good(entity)

    def good_entities(self) -> List[Entity]:
        return [Entity(id=i) for i in sorted(self.table) if self.table[i]]
