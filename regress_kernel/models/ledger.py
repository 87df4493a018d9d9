"""Verification Record — one ledger entry per scenario run."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from regress_kernel.models.verdict import ScenarioReport


class VerificationRecord(BaseModel):
    """
    Audit entry for a scenario run. Answers: which scenario, did the
    underdetermination property hold, was that what was expected.
    """

    id: str
    scenario: str
    underdetermined: bool
    expectation_met: bool
    report: ScenarioReport
    recorded_at: datetime

    # INTEGRITY
    signature: str = ""
    prior_record_hash: Optional[str] = None
