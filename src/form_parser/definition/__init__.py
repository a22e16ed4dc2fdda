"""
Definition tree: field schemas, code uniqueness scopes, the identifier
registry, the node variants, and the build / rehydrate passes.

Import from the submodules directly, e.g.::

    from form_parser.definition.builder import build_form
    from form_parser.definition.rehydrate import rehydrate
"""
