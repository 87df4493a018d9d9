"""
Verification Engine — wraps the decision procedures into structured reports.

Behavioral Contract:
- Accepts worldviews, observation functions and criteria as immutable values
- Runs only exhaustive, terminating checks over closed finite domains
- Returns report models carrying the boolean result and its witnesses
- Never mutates its inputs and keeps no state between calls
"""

import logging
from typing import List

from regress_kernel.consistency.checker import (
    disagree_on_outcome,
    disagreement_witnesses,
    find_inconsistencies,
    is_consistent,
)
from regress_kernel.grounding.constructor import (
    build_grounded_worldview,
    grounding_witnesses,
    is_contested,
    is_uniquely_determined,
    respects_observation,
    satisfies_witness_guarantee,
)
from regress_kernel.models.verdict import (
    CheckVerdict,
    ConsistencyReport,
    DisagreementReport,
    GroundingReport,
)
from regress_kernel.models.worldview import ExternalCriterion, ObservationFunction, Worldview

logger = logging.getLogger(__name__)


class VerificationEngine:
    """Stateless front for the consistency, disagreement and grounding checks."""

    def check_consistency(
        self, worldview: Worldview, observe: ObservationFunction
    ) -> ConsistencyReport:
        consistent = is_consistent(worldview, observe)
        counterexamples = [] if consistent else find_inconsistencies(worldview, observe)
        for entity in counterexamples:
            logger.debug(
                "%s: good(%s)=%s but correct(%s)=%s",
                worldview.name,
                entity,
                worldview.judges_good(entity),
                observe(entity).value,
                worldview.judges_correct(observe(entity)),
            )
        return ConsistencyReport(
            worldview=worldview.name,
            consistent=consistent,
            verdict=CheckVerdict.of(consistent),
            entities_checked=len(observe.domain),
            counterexamples=counterexamples,
        )

    def check_disagreement(
        self, first: Worldview, second: Worldview
    ) -> DisagreementReport:
        disagree = disagree_on_outcome(first, second)
        return DisagreementReport(
            first=first.name,
            second=second.name,
            disagree=disagree,
            witnesses=disagreement_witnesses(first, second) if disagree else [],
        )

    def check_pairwise_disagreement(
        self, worldviews: List[Worldview]
    ) -> List[DisagreementReport]:
        """Disagreement reports for every unordered pair, in input order."""
        reports = []
        for i, first in enumerate(worldviews):
            for second in worldviews[i + 1:]:
                reports.append(self.check_disagreement(first, second))
        return reports

    def check_grounding(
        self, criterion: ExternalCriterion, observe: ObservationFunction
    ) -> GroundingReport:
        """Build the grounded worldview and evaluate every grounding property."""
        worldview = build_grounded_worldview(criterion, observe)
        if not criterion.good_entities():
            logger.warning(
                "Criterion '%s' judges no entity good; every outcome is deemed incorrect",
                criterion.name,
            )
        return GroundingReport(
            criterion=criterion.name,
            basis=criterion.basis,
            worldview=worldview,
            witnesses=grounding_witnesses(criterion, observe),
            witness_guarantee_held=satisfies_witness_guarantee(worldview, criterion, observe),
            consistent=is_consistent(worldview, observe),
            respects_observation=respects_observation(criterion, observe),
            uniquely_determined=is_uniquely_determined(criterion, observe),
            contested=is_contested(criterion),
        )
