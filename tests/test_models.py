"""Tests for the finite domain types and function tables."""

import pytest
from pydantic import ValidationError

from regress_kernel.config import reset_config
from regress_kernel.errors import DomainContractError
from regress_kernel.models import (
    Entity,
    EntityDomain,
    ExternalCriterion,
    ObservationFunction,
    Outcome,
    Worldview,
)


@pytest.fixture
def two_entities():
    return EntityDomain.of_size(2)


class TestEntity:
    def test_structural_equality(self):
        assert Entity(id=3) == Entity(id=3)
        assert Entity(id=3) != Entity(id=4)

    def test_hashable(self):
        assert len({Entity(id=1), Entity(id=1), Entity(id=2)}) == 2

    def test_negative_id_rejected(self):
        with pytest.raises(ValidationError):
            Entity(id=-1)

    def test_immutable(self):
        entity = Entity(id=0)
        with pytest.raises(Exception):
            entity.id = 5

    def test_str(self):
        assert str(Entity(id=7)) == "E7"


class TestOutcome:
    def test_enumeration_visits_each_value_once(self):
        outcomes = Outcome.enumerate()
        assert len(outcomes) == 2
        assert set(outcomes) == {Outcome.POSITIVE, Outcome.NEGATIVE}
        assert outcomes == [Outcome.POSITIVE, Outcome.NEGATIVE]


class TestEntityDomain:
    def test_enumeration_visits_each_entity_once(self):
        domain = EntityDomain.of_size(3)
        visited = domain.enumerate()
        assert len(visited) == 3
        assert len(set(visited)) == 3
        assert [e.id for e in visited] == [0, 1, 2]

    def test_from_ids_sorts(self):
        domain = EntityDomain.from_ids([2, 0, 1])
        assert domain.ids() == [0, 1, 2]

    def test_membership_and_len(self, two_entities):
        assert Entity(id=1) in two_entities
        assert Entity(id=2) not in two_entities
        assert len(two_entities) == 2

    def test_empty_domain_rejected(self):
        with pytest.raises(DomainContractError):
            EntityDomain(entities=[])

    def test_duplicate_ids_rejected(self):
        with pytest.raises(DomainContractError):
            EntityDomain(entities=[Entity(id=0), Entity(id=0)])

    def test_size_bound_from_config(self, monkeypatch):
        monkeypatch.setenv("REGRESS_MAX_DOMAIN_SIZE", "2")
        reset_config()
        try:
            EntityDomain.of_size(2)
            with pytest.raises(DomainContractError):
                EntityDomain.of_size(3)
        finally:
            monkeypatch.delenv("REGRESS_MAX_DOMAIN_SIZE")
            reset_config()


class TestObservationFunction:
    def test_tabulate(self, two_entities):
        observe = ObservationFunction.tabulate(
            two_entities,
            lambda e: Outcome.POSITIVE if e.id == 0 else Outcome.NEGATIVE,
        )
        assert observe(Entity(id=0)) == Outcome.POSITIVE
        assert observe(Entity(id=1)) == Outcome.NEGATIVE
        assert observe.domain == two_entities

    def test_non_total_function_fails_at_setup(self, two_entities):
        partial = {0: Outcome.POSITIVE}
        with pytest.raises(DomainContractError, match="not defined for E1"):
            ObservationFunction.tabulate(two_entities, lambda e: partial[e.id])

    def test_out_of_range_result_fails_at_setup(self, two_entities):
        with pytest.raises(DomainContractError, match="expected Outcome"):
            ObservationFunction.tabulate(two_entities, lambda e: "positive")

    def test_lookup_outside_domain(self):
        observe = ObservationFunction(table={0: Outcome.POSITIVE})
        with pytest.raises(DomainContractError):
            observe(Entity(id=9))

    def test_empty_table_rejected(self):
        with pytest.raises(DomainContractError):
            ObservationFunction(table={})

    def test_fiber(self):
        observe = ObservationFunction(table={
            0: Outcome.POSITIVE, 1: Outcome.NEGATIVE, 2: Outcome.POSITIVE,
        })
        assert observe.entities_observing(Outcome.POSITIVE) == [Entity(id=0), Entity(id=2)]
        assert observe.entities_observing(Outcome.NEGATIVE) == [Entity(id=1)]


class TestWorldview:
    def test_tabulate(self, two_entities):
        w = Worldview.tabulate(
            "trust_e0",
            two_entities,
            lambda e: e.id == 0,
            lambda o: o == Outcome.POSITIVE,
        )
        assert w.judges_good(Entity(id=0)) is True
        assert w.judges_good(Entity(id=1)) is False
        assert w.judges_correct(Outcome.POSITIVE) is True
        assert w.judges_correct(Outcome.NEGATIVE) is False

    def test_non_boolean_predicate_rejected(self, two_entities):
        with pytest.raises(DomainContractError, match="expected bool"):
            Worldview.tabulate("w", two_entities, lambda e: 1, lambda o: True)

    def test_non_total_predicate_rejected(self, two_entities):
        partial = {0: True}
        with pytest.raises(DomainContractError):
            Worldview.tabulate("w", two_entities, lambda e: partial[e.id], lambda o: True)

    def test_correctness_must_cover_every_outcome(self):
        with pytest.raises(DomainContractError, match="negative"):
            Worldview(name="w", good={0: True}, correct={Outcome.POSITIVE: True})

    def test_strict_booleans(self):
        with pytest.raises(ValidationError):
            Worldview(
                name="w",
                good={0: 1},
                correct={Outcome.POSITIVE: True, Outcome.NEGATIVE: False},
            )

    def test_quality_lookup_outside_table(self):
        w = Worldview(
            name="w",
            good={0: True},
            correct={Outcome.POSITIVE: True, Outcome.NEGATIVE: False},
        )
        with pytest.raises(DomainContractError):
            w.judges_good(Entity(id=1))

    def test_complement(self, two_entities):
        w = Worldview.tabulate(
            "a", two_entities, lambda e: e.id == 0, lambda o: o == Outcome.POSITIVE
        )
        c = w.complement()
        assert c.name == "not_a"
        assert c.good == {0: False, 1: True}
        assert c.correct == {Outcome.POSITIVE: False, Outcome.NEGATIVE: True}
        assert c.complement("a") == w

    def test_covers(self, two_entities):
        w = Worldview(
            name="w",
            good={0: True},
            correct={Outcome.POSITIVE: True, Outcome.NEGATIVE: False},
        )
        assert not w.covers(two_entities)
        assert w.covers(EntityDomain.of_size(1))


class TestExternalCriterion:
    def test_tabulate_and_good_entities(self):
        criterion = ExternalCriterion.tabulate(
            "audit", "Independent audit", EntityDomain.of_size(3), lambda e: e.id != 1
        )
        assert criterion(Entity(id=0)) is True
        assert criterion(Entity(id=1)) is False
        assert criterion.good_entities() == [Entity(id=0), Entity(id=2)]
        assert criterion.basis == "Independent audit"

    def test_lookup_outside_table(self):
        criterion = ExternalCriterion(name="c", basis="b", table={0: True})
        with pytest.raises(DomainContractError):
            criterion(Entity(id=3))


class TestObservationDomainBound:
    def test_oversized_table_rejected(self, monkeypatch):
        monkeypatch.setenv("REGRESS_MAX_DOMAIN_SIZE", "2")
        reset_config()
        try:
            with pytest.raises(DomainContractError, match="max_domain_size"):
                ObservationFunction(table={i: Outcome.POSITIVE for i in range(3)})
        finally:
            monkeypatch.delenv("REGRESS_MAX_DOMAIN_SIZE")
            reset_config()
