"""
Grounding Constructor — breaking the regress with an external criterion.

Given a quality judgment that does not depend on the observations, the
correctness predicate is reconstructed existentially: an outcome is correct
iff some externally-good entity was observed producing it.

The construction guarantees that every outcome produced by a good entity is
deemed correct. It does not by itself guarantee full consistency: an entity
judged bad that happens to share an outcome with a good one is left
inconsistent. ``respects_observation`` decides exactly when the stronger
property holds.
"""

import logging
from typing import Dict, List, Optional

from regress_kernel.consistency.checker import (
    enumerate_correctness_assignments,
    is_consistent,
)
from regress_kernel.models.domain import Entity, Outcome
from regress_kernel.models.worldview import ExternalCriterion, ObservationFunction, Worldview

logger = logging.getLogger(__name__)


def build_grounded_worldview(
    criterion: ExternalCriterion,
    observe: ObservationFunction,
    name: Optional[str] = None,
) -> Worldview:
    """judges_good := criterion; judges_correct(o) := exists e. criterion(e) and observe(e) == o."""
    entities = observe.domain.enumerate()
    good = {e.id: criterion(e) for e in entities}
    correct = {
        outcome: any(criterion(e) and observe(e) == outcome for e in entities)
        for outcome in Outcome.enumerate()
    }
    return Worldview(
        name=name or f"grounded_{criterion.name}",
        good=good,
        correct=correct,
    )


def grounding_witnesses(
    criterion: ExternalCriterion, observe: ObservationFunction
) -> Dict[Outcome, List[Entity]]:
    """For each outcome, the criterion-good entities observed producing it."""
    witnesses: Dict[Outcome, List[Entity]] = {}
    for entity in observe.domain.enumerate():
        if criterion(entity):
            witnesses.setdefault(observe(entity), []).append(entity)
    return witnesses


def satisfies_witness_guarantee(
    worldview: Worldview,
    criterion: ExternalCriterion,
    observe: ObservationFunction,
) -> bool:
    """Every outcome actually produced by a criterion-good entity is judged correct."""
    for entity in observe.domain.enumerate():
        if criterion(entity) and not worldview.judges_correct(observe(entity)):
            logger.debug(
                "%s rejects %s produced by good entity %s",
                worldview.name, observe(entity).value, entity,
            )
            return False
    return True


def respects_observation(
    criterion: ExternalCriterion, observe: ObservationFunction
) -> bool:
    """
    True iff the criterion is constant on every set of entities sharing an
    observed outcome. The grounded worldview is consistent exactly when this
    holds.
    """
    for outcome in Outcome.enumerate():
        judgments = {criterion(e) for e in observe.entities_observing(outcome)}
        if len(judgments) > 1:
            return False
    return True


def grounded_consistent_worldviews(
    criterion: ExternalCriterion, observe: ObservationFunction
) -> List[Worldview]:
    """
    Every consistent worldview whose quality predicate is the criterion.

    Outcomes no entity produced are not constrained by the evidence; they
    are pinned to the grounded value so that only observed outcomes can
    vary.
    """
    grounded = build_grounded_worldview(criterion, observe)
    observed = set(observe.table.values())
    candidates = []
    for correct in enumerate_correctness_assignments():
        if any(
            correct[o] != grounded.judges_correct(o)
            for o in Outcome.enumerate() if o not in observed
        ):
            continue
        candidate = Worldview(
            name=f"{grounded.name}_candidate_{len(candidates)}",
            good=grounded.good,
            correct=correct,
        )
        if is_consistent(candidate, observe):
            candidates.append(candidate)
    return candidates


def is_uniquely_determined(
    criterion: ExternalCriterion, observe: ObservationFunction
) -> bool:
    """Whether the criterion leaves exactly one consistent worldview."""
    return len(grounded_consistent_worldviews(criterion, observe)) == 1


def is_contested(criterion: ExternalCriterion) -> bool:
    """
    Whether the criterion is itself open to dispute.

    Vacuously true for every criterion. No formal contestability check is
    attempted; the claim that any external criterion can be challenged is a
    modelling assumption, not something this kernel decides.
    """
    return True
