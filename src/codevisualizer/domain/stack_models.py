from __future__ import annotations

"""
Technology Stack Domain Models.

Defines the normalized taxonomy produced by the manifest classifier and the
per-manifest contribution unit that is folded into it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Tuple


class Category(str, Enum):
    """Stack taxonomy buckets."""
    LANGUAGES = "languages"
    FRONTEND = "frontend"
    BACKEND = "backend"
    TOOLS = "tools"
    AI_ML = "ai_ml"


# A single (category, label) classification emitted by a rule
Label = Tuple[Category, str]

# Everything one marker evaluation produced
StackContribution = FrozenSet[Label]


@dataclass(frozen=True)
class StackDescriptor:
    """
    Immutable, deduplicated technology stack of a repository.

    Every category holds unique labels in sorted order so that equal inputs
    always render identically.
    """
    languages: Tuple[str, ...] = ()
    frontend: Tuple[str, ...] = ()
    backend: Tuple[str, ...] = ()
    tools: Tuple[str, ...] = ()
    ai_ml: Tuple[str, ...] = ()

    @classmethod
    def from_contributions(cls, contributions: Iterable[StackContribution]) -> StackDescriptor:
        """Fold any number of contributions into a finalized descriptor."""
        buckets: Dict[Category, set] = {c: set() for c in Category}
        for contribution in contributions:
            for category, label in contribution:
                buckets[category].add(label)

        return cls(**{c.value: tuple(sorted(buckets[c])) for c in Category})

    def get(self, category: Category) -> Tuple[str, ...]:
        return getattr(self, category.value)

    @property
    def is_empty(self) -> bool:
        return not any(self.get(c) for c in Category)

    def to_dict(self) -> Dict[str, List[str]]:
        return {c.value: list(self.get(c)) for c in Category}
