"""Regress Kernel data models."""

from regress_kernel.models.domain import Entity, EntityDomain, Outcome
from regress_kernel.models.ledger import VerificationRecord
from regress_kernel.models.scenario import Scenario
from regress_kernel.models.verdict import (
    CheckVerdict,
    ConsistencyReport,
    DisagreementReport,
    GroundingReport,
    ScenarioReport,
)
from regress_kernel.models.worldview import (
    ExternalCriterion,
    ObservationFunction,
    Worldview,
)

__all__ = [
    "CheckVerdict",
    "ConsistencyReport",
    "DisagreementReport",
    "Entity",
    "EntityDomain",
    "ExternalCriterion",
    "GroundingReport",
    "ObservationFunction",
    "Outcome",
    "Scenario",
    "ScenarioReport",
    "VerificationRecord",
    "Worldview",
]
