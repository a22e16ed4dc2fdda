from __future__ import annotations

from typing import Optional

from form_parser.definition.builder import FormTree
from form_parser.definition.nodes import DefinitionNode, FormRoot, Question
from form_parser.definition.registry import IdentifierRegistry
from form_parser.logging import get_logger

log = get_logger(__name__)


def _register(node: DefinitionNode, registry: IdentifierRegistry) -> None:
    registry.put(node.identifier, node)
    if isinstance(node, Question) and node.has_deferred_validation:
        registry.add_validation(node)
    for child in node.children:
        _register(child, registry)


def rehydrate(root: FormRoot, registry: Optional[IdentifierRegistry] = None) -> FormTree:
    """
    Rebuild the lookup structures of a form loaded from storage.

    Walks the tree top-down in build order, registering every identifier and
    every question with a deferred validation hook. No validation happens
    here; the tree was validated when it was built.

    Idempotent: ``registry`` is cleared first, so repeated calls leave it in
    the same state.
    """
    registry = registry if registry is not None else IdentifierRegistry()
    registry.clear()

    _register(root, registry)

    log.debug(
        "Rehydrated form %r: %d identifiers, %d deferred validation(s)",
        root.code,
        len(registry),
        len(registry.validations),
    )
    return FormTree(root=root, registry=registry)
