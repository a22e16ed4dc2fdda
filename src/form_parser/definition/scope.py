from __future__ import annotations

from collections import Counter
from enum import Enum
from typing import Any, Dict, Iterable, List


class UniquenessMode(Enum):
    """Where a node's ``code`` has to be unique."""

    FORM_WIDE = "form_wide"
    PARENT_LOCAL = "parent_local"


class CodePool:
    """
    Multiset of codes seen in one scope.

    Codes are counted by their text, the same form they take inside a node
    identifier, so YAML ``1`` and ``"1"`` are the same code.
    """

    def __init__(self) -> None:
        self._counts: Counter = Counter()

    def register(self, code: Any) -> None:
        self._counts[str(code)] += 1

    def count(self, code: Any) -> int:
        return self._counts.get(str(code), 0)

    def duplicates(self) -> List[Any]:
        return [code for code, n in self._counts.items() if n > 1]

    def has_duplicates(self) -> bool:
        return any(n > 1 for n in self._counts.values())

    def collides(self, codes: Iterable[Any]) -> List[Any]:
        """Return the codes from ``codes`` that occur more than once in the pool."""
        seen = []
        for code in codes:
            key = str(code)
            if self.count(key) > 1 and key not in seen:
                seen.append(key)
        return seen

    def clear(self) -> None:
        self._counts.clear()

    def __len__(self) -> int:
        return sum(self._counts.values())

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return f"<CodePool codes={len(self)} duplicates={self.duplicates()!r}>"


class UniquenessScope:
    """
    Form-wide code pools, one per node kind, for a single form load.

    Parent-local pools are not kept here; each parent owns its own while it
    processes its children.
    """

    def __init__(self) -> None:
        self._pools: Dict[str, CodePool] = {}

    def pool(self, kind: str) -> CodePool:
        pool = self._pools.get(kind)
        if pool is None:
            pool = self._pools[kind] = CodePool()
        return pool

    def kinds(self) -> List[str]:
        return sorted(self._pools)

    def reset(self) -> None:
        self._pools.clear()
