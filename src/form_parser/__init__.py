"""
form_parser: validate questionnaire definitions into a form tree.

    from form_parser import build_form, rehydrate

    tree = build_form(yaml.safe_load(text))
    question = tree.find("1~~g1q1")
"""

from form_parser.core.exceptions import (
    DefinitionValidationError,
    FormNotFoundError,
    FormParserError,
    PipelineError,
    StructuralError,
)
from form_parser.definition.builder import FormTree, build_form
from form_parser.definition.nodes import Answer, DefinitionNode, FormRoot, Group, Question
from form_parser.definition.registry import IdentifierRegistry
from form_parser.definition.rehydrate import rehydrate

__version__ = "0.1.0"

__all__ = [
    "Answer",
    "DefinitionNode",
    "DefinitionValidationError",
    "FormNotFoundError",
    "FormParserError",
    "FormRoot",
    "FormTree",
    "Group",
    "IdentifierRegistry",
    "PipelineError",
    "Question",
    "StructuralError",
    "build_form",
    "rehydrate",
]
