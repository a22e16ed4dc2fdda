from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional


class IdentifierRegistry:
    """
    Lookup of node identifier -> node for one loaded form.

    Also collects the questions that declare deferred validation hooks
    (``validation:`` in the definition) so response handling can find them
    without walking the tree. Nothing here is persisted; ``rehydrate`` rebuilds
    it after a stored form is loaded.
    """

    def __init__(self) -> None:
        self._index: Dict[str, Any] = {}
        self._validations: List[Any] = []

    # ------------------------------------------------------------------ #
    # Identifier index
    # ------------------------------------------------------------------ #

    def put(self, identifier: str, node: Any) -> None:
        self._index[str(identifier)] = node

    def get(self, identifier: str, default: Optional[Any] = None) -> Optional[Any]:
        if identifier is None:
            return default
        return self._index.get(str(identifier), default)

    def identifiers(self) -> List[str]:
        return list(self._index.keys())

    def __contains__(self, identifier: object) -> bool:
        return str(identifier) in self._index

    def __len__(self) -> int:
        return len(self._index)

    def __iter__(self) -> Iterator[str]:
        return iter(self._index)

    # ------------------------------------------------------------------ #
    # Deferred validation hooks
    # ------------------------------------------------------------------ #

    def add_validation(self, node: Any) -> None:
        if not any(existing is node for existing in self._validations):
            self._validations.append(node)

    @property
    def validations(self) -> List[Any]:
        return list(self._validations)

    def validations_for(self, hook: str) -> List[Any]:
        """Return the nodes whose comma separated ``validation`` field names ``hook``."""
        return [node for node in self._validations if hook in node.validation_hooks]

    def clear(self) -> None:
        self._index.clear()
        self._validations.clear()

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return f"<IdentifierRegistry nodes={len(self._index)} validations={len(self._validations)}>"
