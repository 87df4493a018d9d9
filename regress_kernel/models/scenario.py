"""Scenario — one observation function and the rival worldviews read against it."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, model_validator

from regress_kernel.errors import DomainContractError
from regress_kernel.models.worldview import ExternalCriterion, ObservationFunction, Worldview


class Scenario(BaseModel):
    """
    A concrete regress instance.

    The labels name the two interdependent predicates, e.g.
    ("experiment quality", "outcome correctness").
    """

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    good_label: str = "quality"
    correct_label: str = "correctness"
    observation: ObservationFunction
    worldviews: List[Worldview]
    criterion: Optional[ExternalCriterion] = None
    expect_underdetermined: bool = True

    @model_validator(mode="after")
    def _check_setup(self) -> "Scenario":
        if len(self.worldviews) < 2:
            raise DomainContractError(
                f"Scenario '{self.name}' needs at least two worldviews, "
                f"got {len(self.worldviews)}"
            )
        domain = self.observation.domain
        for worldview in self.worldviews:
            if not worldview.covers(domain):
                raise DomainContractError(
                    f"Worldview '{worldview.name}' is not total over {domain.ids()}"
                )
        if self.criterion is not None:
            missing = [i for i in domain.ids() if i not in self.criterion.table]
            if missing:
                raise DomainContractError(
                    f"Criterion '{self.criterion.name}' is not defined for ids {missing}"
                )
        return self
