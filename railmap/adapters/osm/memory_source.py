"""In-memory entity source."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Sequence

from ...domain.models import Entity


@dataclass
class InMemoryEntitySource:
    """Entity source over an already decoded sequence.

    Iterating twice yields the same entities twice.
    """

    entities: Sequence[Entity] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[Entity]:
        return iter(self.entities)

    def __len__(self) -> int:
        return len(self.entities)
