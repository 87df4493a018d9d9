"""Structured results produced by the verification engine."""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel

from regress_kernel.models.domain import Entity, Outcome
from regress_kernel.models.worldview import Worldview


class CheckVerdict(str, Enum):
    PASS = "pass"
    FAIL = "fail"

    @classmethod
    def of(cls, held: bool) -> "CheckVerdict":
        return cls.PASS if held else cls.FAIL


class ConsistencyReport(BaseModel):
    """Whether one worldview agrees with the evidence on every entity."""

    worldview: str
    consistent: bool
    verdict: CheckVerdict
    entities_checked: int
    counterexamples: List[Entity] = []      # entities where good(e) != correct(observe(e))


class DisagreementReport(BaseModel):
    """Whether two worldviews diverge on the correctness of some outcome."""

    first: str
    second: str
    disagree: bool
    witnesses: List[Outcome] = []           # outcomes judged differently


class GroundingReport(BaseModel):
    """
    Result of grounding a worldview in an external criterion.

    ``witness_guarantee_held`` is the existential guarantee: every outcome
    produced by a criterion-good entity is deemed correct. ``consistent`` is
    the stronger full-consistency check, which only holds when the criterion
    respects the observation fibers.
    """

    criterion: str
    basis: str
    worldview: Worldview
    witnesses: Dict[Outcome, List[Entity]] = {}
    witness_guarantee_held: bool
    consistent: bool
    respects_observation: bool
    uniquely_determined: bool
    contested: bool = True


class ScenarioReport(BaseModel):
    """The end-to-end outcome of running one regress scenario."""

    id: str
    scenario: str
    good_label: str
    correct_label: str
    consistency: List[ConsistencyReport]
    disagreements: List[DisagreementReport]
    underdetermined: bool
    expected_underdetermined: bool
    expectation_met: bool
    grounding: Optional[GroundingReport] = None
    evaluated_at: datetime

    def consistent_worldviews(self) -> List[str]:
        return [c.worldview for c in self.consistency if c.consistent]
