"""
Declarative field schemas for definition nodes.

Each node type owns one ``FieldSchema``: the fields it accepts, which of them
are mandatory, which carry an extra validator, and which field holds its child
collection. ``FieldSchema.validate`` never raises for content problems; it
returns the extracted values together with every error it found.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

# (node, value, ctx, description) -> error message or None
FieldValidator = Callable[[Any, Any, Any, str], Optional[str]]


@dataclass(frozen=True)
class FieldError:
    """One content problem, reported as ``<field>: <message>``."""

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


@dataclass(frozen=True)
class FieldSpec:
    mandatory: bool = False
    validator: Optional[FieldValidator] = None


def is_blank(value: Any) -> bool:
    """
    True for values that count as "not specified".

    ``False`` and ``0`` are real values; ``None``, whitespace-only strings and
    empty collections are not.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (dict, list, tuple, set)):
        return len(value) == 0
    return False


@dataclass(frozen=True)
class FieldSchema:
    """
    Attributes:
        fields:
            Field name -> FieldSpec, in the order errors should be reported.
        children:
            Name of the field holding the child collection, if any. It is
            declared in ``fields`` too so a mandatory collection is enforced,
            but it is never copied into the extracted values.
    """

    fields: Dict[str, FieldSpec] = field(default_factory=dict)
    children: Optional[str] = None

    def validate(
        self,
        body: Any,
        node: Any,
        ctx: Any,
        *,
        description: str,
        sort_field: Optional[str] = None,
    ) -> Tuple[Dict[str, Any], List[FieldError]]:
        data: Mapping[str, Any] = body if isinstance(body, Mapping) else {}
        extracted: Dict[str, Any] = {}
        errors: List[FieldError] = []

        if sort_field and is_blank(data.get(sort_field)):
            errors.append(
                FieldError(
                    sort_field,
                    f"Specified sort field '{sort_field}' missing from {description}",
                )
            )

        for name, spec in self.fields.items():
            value = data.get(name)
            if is_blank(value):
                if spec.mandatory:
                    errors.append(FieldError(name, f"No '{name}' specified for {description}"))
                continue

            if name != self.children:
                extracted[name] = value

            if spec.validator is not None:
                message = spec.validator(node, value, ctx, description)
                if message:
                    errors.append(FieldError(name, message))

        return extracted, errors
