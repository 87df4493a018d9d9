"""
Scenario Driver — runs a regress scenario end to end.

For one observation function and a set of rival worldviews it checks each
worldview for consistency, every pair for disagreement, and the combined
underdetermination property. When the scenario carries an external
criterion, the grounding path is evaluated alongside.

Modelling assumption: every external criterion is itself contested (there
is no criterion whose authority cannot be questioned). This has no
computational content; it is reflected only in the vacuous
``GroundingReport.contested`` flag and is never checked.
"""

import logging
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from regress_kernel.consistency.checker import is_underdetermined
from regress_kernel.errors import UnderdeterminationError
from regress_kernel.ledger.store import VerificationLedger
from regress_kernel.models.ledger import VerificationRecord
from regress_kernel.models.scenario import Scenario
from regress_kernel.models.verdict import ScenarioReport
from regress_kernel.verification.engine import VerificationEngine

logger = logging.getLogger(__name__)


class ScenarioDriver:
    """Runs scenarios and optionally records each run in a verification ledger."""

    def __init__(
        self,
        engine: Optional[VerificationEngine] = None,
        ledger: Optional[VerificationLedger] = None,
    ):
        self.engine = engine or VerificationEngine()
        self.ledger = ledger

    def run(self, scenario: Scenario) -> ScenarioReport:
        """Evaluate every check of the scenario and return the combined report."""
        observation = scenario.observation
        worldviews = scenario.worldviews

        consistency = [
            self.engine.check_consistency(w, observation) for w in worldviews
        ]
        disagreements = self.engine.check_pairwise_disagreement(worldviews)
        underdetermined = is_underdetermined(worldviews, observation)

        grounding = None
        if scenario.criterion is not None:
            grounding = self.engine.check_grounding(scenario.criterion, observation)

        now = datetime.now(timezone.utc)
        report = ScenarioReport(
            id=f"run_{uuid4().hex[:12]}",
            scenario=scenario.name,
            good_label=scenario.good_label,
            correct_label=scenario.correct_label,
            consistency=consistency,
            disagreements=disagreements,
            underdetermined=underdetermined,
            expected_underdetermined=scenario.expect_underdetermined,
            expectation_met=underdetermined == scenario.expect_underdetermined,
            grounding=grounding,
            evaluated_at=now,
        )

        logger.info(
            "Scenario %s: %d/%d worldviews consistent, underdetermined=%s",
            scenario.name,
            len(report.consistent_worldviews()),
            len(worldviews),
            underdetermined,
        )
        if not report.expectation_met:
            logger.warning(
                "Scenario %s expected underdetermined=%s but got %s",
                scenario.name, scenario.expect_underdetermined, underdetermined,
            )

        if self.ledger is not None:
            self.ledger.append(VerificationRecord(
                id=f"ver_{uuid4().hex[:12]}",
                scenario=scenario.name,
                underdetermined=underdetermined,
                expectation_met=report.expectation_met,
                report=report,
                recorded_at=now,
            ))

        return report

    def assert_expected(self, report: ScenarioReport) -> None:
        """
        Fail loudly when the underdetermination property does not match
        the scenario's expectation.
        """
        if not report.expectation_met:
            raise UnderdeterminationError(
                f"Scenario {report.scenario}: expected underdetermined="
                f"{report.expected_underdetermined}, got {report.underdetermined} "
                f"(consistent worldviews: {report.consistent_worldviews()})"
            )

    def run_and_assert(self, scenario: Scenario) -> ScenarioReport:
        report = self.run(scenario)
        self.assert_expected(report)
        return report
