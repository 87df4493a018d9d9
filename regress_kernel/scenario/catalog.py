"""Canonical regress scenarios."""

from typing import Callable, Dict

from regress_kernel.models.domain import EntityDomain, Outcome
from regress_kernel.models.scenario import Scenario
from regress_kernel.models.worldview import ExternalCriterion, ObservationFunction, Worldview


def experiment_regress() -> Scenario:
    """
    Experiment quality vs outcome correctness.

    Two experiments, E0 observed POSITIVE and E1 observed NEGATIVE. Trusting
    E0 makes POSITIVE the correct outcome; trusting E1 makes NEGATIVE
    correct. Both readings fit the data perfectly.
    """
    domain = EntityDomain.of_size(2)
    observation = ObservationFunction.tabulate(
        domain,
        lambda e: Outcome.POSITIVE if e.id == 0 else Outcome.NEGATIVE,
    )
    trust_first = Worldview.tabulate(
        "trust_first_experiment",
        domain,
        lambda e: e.id == 0,
        lambda o: o == Outcome.POSITIVE,
    )
    trust_second = trust_first.complement("trust_second_experiment")
    criterion = ExternalCriterion.tabulate(
        "protocol_audit",
        "Protocol audit of each experiment, completed before results were unblinded",
        domain,
        lambda e: e.id == 0,
    )
    return Scenario(
        name="experiment_regress",
        description="A good experiment yields the correct outcome; "
                    "the correct outcome is what a good experiment yields.",
        good_label="experiment quality",
        correct_label="outcome correctness",
        observation=observation,
        worldviews=[trust_first, trust_second],
        criterion=criterion,
        expect_underdetermined=True,
    )


def model_reliability_regress() -> Scenario:
    """
    Model reliability vs prediction correctness.

    Three models; E0 and E1 predict POSITIVE, E2 predicts NEGATIVE. The
    majority and dissent readings are both consistent. A third reading that
    trusts only E0 is not, since E1 made the same prediction.
    """
    domain = EntityDomain.of_size(3)
    observation = ObservationFunction.tabulate(
        domain,
        lambda e: Outcome.NEGATIVE if e.id == 2 else Outcome.POSITIVE,
    )
    majority = Worldview.tabulate(
        "majority_view",
        domain,
        lambda e: e.id != 2,
        lambda o: o == Outcome.POSITIVE,
    )
    dissent = majority.complement("dissent_view")
    lone_trust = Worldview.tabulate(
        "lone_trust_view",
        domain,
        lambda e: e.id == 0,
        lambda o: o == Outcome.POSITIVE,
    )
    criterion = ExternalCriterion.tabulate(
        "held_out_benchmark",
        "Accuracy on a held-out benchmark disjoint from the predictions under review",
        domain,
        lambda e: e.id != 2,
    )
    return Scenario(
        name="model_reliability_regress",
        description="A reliable model makes correct predictions; "
                    "a correct prediction is one a reliable model makes.",
        good_label="model reliability",
        correct_label="prediction correctness",
        observation=observation,
        worldviews=[majority, dissent, lone_trust],
        criterion=criterion,
        expect_underdetermined=True,
    )


CANONICAL_SCENARIOS: Dict[str, Callable[[], Scenario]] = {
    "experiment_regress": experiment_regress,
    "model_reliability_regress": model_reliability_regress,
}
