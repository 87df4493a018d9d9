"""
Consistency and Disagreement Checkers — the decision procedures of the kernel.

Every check is exhaustive enumeration over a closed, finite domain:
- consistency is a universally quantified statement over entities,
- disagreement is an existentially quantified statement over outcomes,
- underdetermination is the conjunction of both across a set of worldviews.

All functions are pure and total; the only exceptions they raise are
DomainContractError when a caller passes tables that do not cover the
observation function's domain.
"""

import logging
from itertools import combinations, product
from typing import Dict, List

from regress_kernel.models.domain import Entity, Outcome
from regress_kernel.models.worldview import ObservationFunction, Worldview

logger = logging.getLogger(__name__)


def _agrees(worldview: Worldview, observe: ObservationFunction, entity: Entity) -> bool:
    return worldview.judges_good(entity) == worldview.judges_correct(observe(entity))


def is_consistent(worldview: Worldview, observe: ObservationFunction) -> bool:
    """
    True iff, for every entity e in the observed domain,
    judges_good(e) is equivalent to judges_correct(observe(e)).

    Stops at the first counterexample.
    """
    for entity in observe.domain.enumerate():
        if not _agrees(worldview, observe, entity):
            logger.debug("%s inconsistent at %s", worldview.name, entity)
            return False
    return True


def find_inconsistencies(
    worldview: Worldview, observe: ObservationFunction
) -> List[Entity]:
    """Every entity on which the worldview's two judgments disagree."""
    return [
        entity for entity in observe.domain.enumerate()
        if not _agrees(worldview, observe, entity)
    ]


def disagree_on_outcome(first: Worldview, second: Worldview) -> bool:
    """True iff some outcome is judged correct by one worldview and not the other."""
    for outcome in Outcome.enumerate():
        if first.judges_correct(outcome) != second.judges_correct(outcome):
            return True
    return False


def disagreement_witnesses(first: Worldview, second: Worldview) -> List[Outcome]:
    """Every outcome on which the two worldviews' correctness judgments differ."""
    return [
        outcome for outcome in Outcome.enumerate()
        if first.judges_correct(outcome) != second.judges_correct(outcome)
    ]


def is_underdetermined(
    worldviews: List[Worldview], observe: ObservationFunction
) -> bool:
    """
    True iff at least two of the worldviews are each consistent with the
    same observations and some pair of them disagrees on an outcome.
    """
    consistent = [w for w in worldviews if is_consistent(w, observe)]
    return any(
        disagree_on_outcome(a, b) for a, b in combinations(consistent, 2)
    )


def enumerate_correctness_assignments() -> List[Dict[Outcome, bool]]:
    """All 2^|Outcome| correctness tables, in a stable order."""
    outcomes = Outcome.enumerate()
    return [
        dict(zip(outcomes, values))
        for values in product((True, False), repeat=len(outcomes))
    ]


def _assignment_name(correct: Dict[Outcome, bool]) -> str:
    accepted = [o.value for o in Outcome.enumerate() if correct[o]]
    return "correct:" + (",".join(accepted) if accepted else "none")


def enumerate_consistent_worldviews(observe: ObservationFunction) -> List[Worldview]:
    """
    Every worldview consistent with the observations.

    A correctness table forces the quality table through
    good(e) := correct(observe(e)), so there is exactly one consistent
    worldview per correctness assignment.
    """
    domain = observe.domain
    worldviews = []
    for correct in enumerate_correctness_assignments():
        good = {e.id: correct[observe(e)] for e in domain.enumerate()}
        worldviews.append(
            Worldview(name=_assignment_name(correct), good=good, correct=correct)
        )
    return worldviews
