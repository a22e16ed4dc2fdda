from __future__ import annotations

from typing import List, Optional, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from form_parser.definition.schema import FieldError


class FormParserError(Exception):
    """Base exception for form parser failures."""


class StructuralError(FormParserError):
    """Raised when the definition document itself is malformed."""


class DefinitionValidationError(FormParserError):
    """
    Raised once per build when content errors were collected.

    ``errors`` keeps the individual FieldError records; the message is the
    newline-delimited report shown to the form author.
    """

    def __init__(self, errors: Sequence["FieldError"], source: Optional[str] = None):
        self.errors: List["FieldError"] = list(errors)
        self.source = source
        super().__init__(self.report)

    @property
    def report(self) -> str:
        header = f"Errors found in form definition {self.source or '<document>'}:\n"
        return header + "".join(f"{error}\n" for error in self.errors)


class FormNotFoundError(FormParserError, FileNotFoundError):
    """Raised when no definition file exists for a form code."""


class PipelineError(FormParserError):
    """Raised when the load pipeline fails for a reason other than the definition."""
