"""
Build a validated form tree from a parsed definition document.

    document -> FormRoot -> Group -> Question -> Answer -> Question ...

``build_form`` is the only place that decides whether a build failed: nodes
hand back their content errors, and once the whole tree has been walked a
non-empty list becomes a single DefinitionValidationError carrying every
problem in the document.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping, Optional

from form_parser.config import get_config
from form_parser.core.context import BuildContext
from form_parser.core.exceptions import DefinitionValidationError, StructuralError
from form_parser.definition.nodes import DefinitionNode, FormRoot
from form_parser.definition.registry import IdentifierRegistry
from form_parser.definition.schema import is_blank
from form_parser.logging import get_logger

log = get_logger(__name__)


@dataclass
class FormTree:
    """
    A validated form plus its (non-persisted) lookup structures.

    Attributes:
        root: The FormRoot; this is what gets persisted.
        registry: Identifier index and deferred validation list for ``root``.
    """

    root: FormRoot
    registry: IdentifierRegistry = field(default_factory=IdentifierRegistry)

    def find(self, identifier: str) -> Optional[DefinitionNode]:
        return self.registry.get(identifier)

    def iter_nodes(self) -> Iterator[DefinitionNode]:
        return self.root.iter_subtree()

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return f"<FormTree code={self.root.code!r} nodes={len(self.registry)}>"


def build_form(
    document: Any,
    *,
    form_code: Optional[str] = None,
    source: Optional[str] = None,
    root_tag: Optional[str] = None,
    separator: Optional[str] = None,
) -> FormTree:
    """
    Validate ``document`` and return the resulting FormTree.

    Args:
        document: Parsed definition (a mapping with the root tag at the top).
        form_code: Code of the form; becomes the root identifier, so every
            node identifier is prefixed by it. Empty/None gives an empty root
            identifier.
        source: Name used in error reports (usually the definition file path).
        root_tag: Top-level key holding the form; defaults to the configured one.
        separator: Identifier separator; defaults to the configured one.

    Raises:
        StructuralError: the document has no usable root section or contains
            a section that is not a tagged pair. Nothing is returned.
        DefinitionValidationError: one or more content errors were found.
    """
    cfg = get_config()
    root_tag = root_tag or cfg.root_tag
    source = source or "<document>"

    ctx = BuildContext(logger=log, separator=separator or cfg.separator, source=source)
    ctx.reset()

    if not isinstance(document, Mapping) or is_blank(document.get(root_tag)):
        log.error("%s has no '%s' section", source, root_tag)
        raise StructuralError(f"{source} is not a valid form definition (no '{root_tag}' section)")

    log.info("Building form definition from %s", source)

    root = FormRoot(code=form_code or None)
    errors = root.validate((root_tag, document[root_tag]), ctx)

    if errors:
        log.warning("Form definition %s has %d error(s)", source, len(errors))
        raise DefinitionValidationError(errors, source=source)

    log.info(
        "Form definition %s validated: %d nodes, %d deferred validation(s)",
        source,
        ctx.nodes_built,
        len(ctx.registry.validations),
    )
    return FormTree(root=root, registry=ctx.registry)
