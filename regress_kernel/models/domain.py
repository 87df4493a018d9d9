"""Finite Domain Types — the closed, enumerable sets every check ranges over."""

from enum import Enum
from typing import Iterable, List

from pydantic import BaseModel, ConfigDict, Field, model_validator

from regress_kernel.config import get_config
from regress_kernel.errors import DomainContractError


class Entity(BaseModel):
    """An opaque finite identifier (an experiment, a model, a trial...)."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=0)

    def __str__(self) -> str:
        return f"E{self.id}"


class Outcome(str, Enum):
    """The closed two-valued outcome variant."""
    POSITIVE = "positive"
    NEGATIVE = "negative"

    @classmethod
    def enumerate(cls) -> List["Outcome"]:
        """Every outcome value, each exactly once, in declaration order."""
        return list(cls)


class EntityDomain(BaseModel):
    """
    The closed set of entities a scenario exercises.

    Ordered by construction, duplicate-free, non-empty, and bounded by
    ``max_domain_size`` so that exhaustive enumeration stays trivial.
    """

    model_config = ConfigDict(frozen=True)

    entities: List[Entity]

    @model_validator(mode="after")
    def _check_closed(self) -> "EntityDomain":
        if not self.entities:
            raise DomainContractError("Entity domain must contain at least one entity")
        ids = [e.id for e in self.entities]
        if len(set(ids)) != len(ids):
            raise DomainContractError(f"Entity domain has duplicate ids: {ids}")
        limit = get_config().max_domain_size
        if len(ids) > limit:
            raise DomainContractError(
                f"Entity domain of size {len(ids)} exceeds max_domain_size={limit}"
            )
        return self

    @classmethod
    def of_size(cls, size: int) -> "EntityDomain":
        """Build the domain {E0, ..., E(size-1)}."""
        return cls(entities=[Entity(id=i) for i in range(size)])

    @classmethod
    def from_ids(cls, ids: Iterable[int]) -> "EntityDomain":
        return cls(entities=[Entity(id=i) for i in sorted(ids)])

    def enumerate(self) -> List[Entity]:
        """Every entity in the domain, each exactly once."""
        return list(self.entities)

    def ids(self) -> List[int]:
        return [e.id for e in self.entities]

    def __len__(self) -> int:
        return len(self.entities)

    def __contains__(self, entity: object) -> bool:
        return entity in self.entities
