from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Optional

from form_parser.config import DEFAULT_SEPARATOR
from form_parser.definition.registry import IdentifierRegistry
from form_parser.definition.scope import UniquenessScope


@dataclass
class BuildContext:
    """
    Load-scoped state shared by every node of one build or rehydrate pass.

    A fresh context is created per load, so two forms never share code pools
    or identifier registries.
    """

    logger: Any
    separator: str = DEFAULT_SEPARATOR
    source: Optional[str] = None

    scope: UniquenessScope = field(default_factory=UniquenessScope)
    registry: IdentifierRegistry = field(default_factory=IdentifierRegistry)

    nodes_built: int = 0

    def reset(self) -> None:
        self.scope.reset()
        self.registry.clear()
        self.nodes_built = 0

    def make_identifier(self, owner: Optional[str], code: Any) -> str:
        code_text = "" if code is None else str(code)
        if owner:
            return f"{owner}{self.separator}{code_text}"
        return code_text
