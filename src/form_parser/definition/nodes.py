"""
Definition tree nodes.

A form definition is a recursive structure::

    FormRoot -> Group* -> Question* -> Answer* -> Question* (sub-questions) -> ...

Every node is built the same way: decode its ``(tag, body)`` section, check
the body against the node type's ``FieldSchema``, register its identifier,
recurse into its child collection, check child codes for duplicates, and sort
the children. Content problems are returned as ``FieldError`` lists and
aggregated by the parent; only structural problems (a section that is not a
tagged pair, a child collection that is not a collection) raise.

Build-only state (section tag and body, sort field, the parent-local code
pool) lives in ``SectionContext`` and is never attached to a node, so a
validated node holds exactly what gets persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Iterator, List, Mapping, Optional, Tuple, Type

from form_parser.core.exceptions import StructuralError
from form_parser.definition.schema import FieldError, FieldSchema, FieldSpec, is_blank
from form_parser.definition.scope import CodePool, UniquenessMode

QUESTION_TYPES = (
    "multiplechoice",
    "singlechoice",
    "textbox",
    "textfield",
    "selectionbox",
)

DEFAULT_SORT_FIELD = "sort_order"


# ----------------------------------------------------------------------
# Sections
# ----------------------------------------------------------------------

@dataclass
class SectionContext:
    """Transient state of one node while it is being validated."""

    tag: Any
    body: Any
    sort_field: Optional[str] = None
    local_codes: CodePool = field(default_factory=CodePool)
    # one entry per validated child, read from the child's section body
    sort_keys: List[Any] = field(default_factory=list)


def decode_section(raw: Any) -> Tuple[Any, Any]:
    """
    Split a raw section into ``(tag, body)``.

    Accepted shapes: a 2-item tuple/list (what iterating a YAML mapping
    yields) or a single-key mapping (a YAML sequence of ``- tag: body``).
    """
    if isinstance(raw, Mapping) and len(raw) == 1:
        ((tag, body),) = raw.items()
        return tag, body
    if isinstance(raw, (tuple, list)) and len(raw) == 2 and not is_blank(raw[0]):
        return raw[0], raw[1]
    raise StructuralError(f"Invalid data found in form: {raw!r}")


def iter_sections(collection: Any, description: str) -> List[Any]:
    """Return the raw child sections of a collection, in document order."""
    if isinstance(collection, Mapping):
        return list(collection.items())
    if isinstance(collection, (list, tuple)):
        return [entry for entry in collection if entry is not None]
    raise StructuralError(
        f"Invalid data found in form: expected a collection of sections in {description}, "
        f"got {type(collection).__name__}"
    )


def _sort_key(value: Any) -> Tuple[int, Any]:
    # Numbers before strings so mixed collections never compare int to str.
    if isinstance(value, (int, float)):
        return (0, value)
    return (1, str(value))


def sort_nodes(nodes: List["DefinitionNode"], keys: List[Any]) -> List["DefinitionNode"]:
    """
    Stable ascending sort of ``nodes`` by ``keys`` (one sort value per node).

    The sort field does not have to be a declared field of the child type,
    so its values are read from the section bodies while building.
    """
    order = sorted(range(len(nodes)), key=lambda i: _sort_key(keys[i]))
    return [nodes[i] for i in order]


def sort_value(body: Any, sort_field: Optional[str]) -> Any:
    if not sort_field or not isinstance(body, Mapping):
        return None
    return body.get(sort_field)


# ----------------------------------------------------------------------
# Field validators
# ----------------------------------------------------------------------

def _poolable(code: Any) -> bool:
    return code is not None and not isinstance(code, (Mapping, list, tuple, set))


def check_code(node: "DefinitionNode", value: Any, ctx: Any, description: str) -> Optional[str]:
    if isinstance(value, (Mapping, list, tuple, set)):
        return f"Invalid code {value!r} specified for {description}, code must be a single value"
    return None


def check_question_type(node: "DefinitionNode", value: Any, ctx: Any, description: str) -> Optional[str]:
    if value not in QUESTION_TYPES:
        return f"Invalid question type {value} specified for {description}"
    return None


def split_hooks(value: Any) -> List[str]:
    """Names in a comma separated ``validation`` value, blanks dropped."""
    if is_blank(value):
        return []
    return [hook.strip() for hook in str(value).split(",") if hook.strip()]


def register_deferred_validation(node: "DefinitionNode", value: Any, ctx: Any, description: str) -> Optional[str]:
    if not split_hooks(value):
        return f"Invalid validation {value!r} specified for {description}, no validation names given"
    ctx.registry.add_validation(node)
    return None


# ----------------------------------------------------------------------
# Nodes
# ----------------------------------------------------------------------

@dataclass
class DefinitionNode:
    """
    Base class for every node in a form definition tree.

    Attributes:
        code: Author supplied identifier, unique within the node type's scope.
        owner_identifier: Identifier of the logical parent ("" at the root).
        identifier: ``owner_identifier + separator + code``.
        fields: Declared, non-blank field values from the definition.
        children: Validated child nodes, sorted by the parent's sort field.
    """

    kind: ClassVar[str] = "node"
    schema: ClassVar[FieldSchema] = FieldSchema()
    uniqueness_mode: ClassVar[UniquenessMode] = UniquenessMode.FORM_WIDE
    has_code: ClassVar[bool] = True

    code: Any = None
    owner_identifier: str = ""
    identifier: str = ""
    fields: Dict[str, Any] = field(default_factory=dict)
    children: List["DefinitionNode"] = field(default_factory=list)

    # ------------------------------------------------------------------ #
    # Per-variant hooks
    # ------------------------------------------------------------------ #

    @classmethod
    def child_type(cls) -> Optional[Type["DefinitionNode"]]:
        return None

    def child_sort_field(self) -> Optional[str]:
        return DEFAULT_SORT_FIELD

    def describe(self, tag: Any = None) -> str:
        return self.kind if is_blank(tag) else f"{self.kind} {tag}"

    # ------------------------------------------------------------------ #
    # Accessors
    # ------------------------------------------------------------------ #

    def get(self, name: str, default: Any = None) -> Any:
        return self.fields.get(name, default)

    def iter_subtree(self) -> Iterator["DefinitionNode"]:
        """Yield this node and all descendants in depth-first order."""
        yield self
        for child in self.children:
            yield from child.iter_subtree()

    # ------------------------------------------------------------------ #
    # Validation
    # ------------------------------------------------------------------ #

    def validate(self, raw_section: Any, ctx: Any, sort_field: Optional[str] = None) -> List[FieldError]:
        """
        Validate one section of the definition and build this node from it.

        Returns every content error found in this node and its subtree.
        Raises StructuralError if the section is not a tagged pair.
        """
        tag, body = decode_section(raw_section)
        return self.validate_section(tag, body, ctx, sort_field=sort_field)

    def validate_section(
        self, tag: Any, body: Any, ctx: Any, sort_field: Optional[str] = None
    ) -> List[FieldError]:
        section = SectionContext(tag=tag, body=body, sort_field=sort_field)
        description = self.describe(tag)

        extracted, errors = self.schema.validate(
            body, self, ctx, description=description, sort_field=sort_field
        )
        self.fields = extracted
        if self.has_code:
            self.code = extracted.get("code")

        self.identifier = ctx.make_identifier(self.owner_identifier, self.code)
        ctx.registry.put(self.identifier, self)
        ctx.nodes_built += 1
        ctx.logger.debug("Validated %s (identifier=%r)", description, self.identifier)

        children, child_errors = self._validate_children(section, ctx, description)
        errors.extend(child_errors)

        if not errors and self.child_sort_field() and children:
            children = sort_nodes(children, section.sort_keys)
        self.children = children

        return errors

    def _validate_children(
        self, section: SectionContext, ctx: Any, description: str
    ) -> Tuple[List["DefinitionNode"], List[FieldError]]:
        child_cls = self.child_type()
        child_field = self.schema.children
        body = section.body if isinstance(section.body, Mapping) else {}
        if child_cls is None or child_field is None or is_blank(body.get(child_field)):
            return [], []

        sort_field = self.child_sort_field()
        form_codes = ctx.scope.pool(child_cls.kind)
        batch: List[Any] = []
        children: List[DefinitionNode] = []
        errors: List[FieldError] = []

        for raw in iter_sections(body[child_field], description):
            tag, child_body = decode_section(raw)
            child = child_cls(owner_identifier=self.identifier)
            errors.extend(child.validate_section(tag, child_body, ctx, sort_field=sort_field))
            children.append(child)
            section.sort_keys.append(sort_value(child_body, sort_field))

            if child_cls.has_code and _poolable(child.code):
                form_codes.register(child.code)
                section.local_codes.register(child.code)
                batch.append(child.code)

        errors.extend(self._check_duplicates(child_cls, form_codes, section.local_codes, batch, description, ctx))
        return children, errors

    def _check_duplicates(
        self,
        child_cls: Type["DefinitionNode"],
        form_codes: CodePool,
        local_codes: CodePool,
        batch: List[Any],
        description: str,
        ctx: Any,
    ) -> List[FieldError]:
        if child_cls.uniqueness_mode is UniquenessMode.PARENT_LOCAL:
            duplicates = local_codes.duplicates()
            scope_text = f"this {description}"
        else:
            # Only codes added by this parent can complete a new collision,
            # so each form-wide collision is reported exactly once.
            duplicates = form_codes.collides(batch)
            scope_text = "complete form"

        if not duplicates:
            return []

        ctx.logger.debug("Duplicate %s codes under %s: %r", child_cls.kind, description, duplicates)
        return [
            FieldError(
                "code",
                f"Duplicate {child_cls.kind} 'code' found, code must be unique for {scope_text}",
            )
        ]


@dataclass
class FormRoot(DefinitionNode):
    """The form itself: top-level settings plus its groups."""

    kind: ClassVar[str] = "form"
    has_code: ClassVar[bool] = False
    schema: ClassVar[FieldSchema] = FieldSchema(
        fields={
            "name": FieldSpec(mandatory=True),
            "welcome": FieldSpec(),
            "thank_you": FieldSpec(),
            "groups": FieldSpec(mandatory=True),
            "group_sort_order_field": FieldSpec(mandatory=True),
        },
        children="groups",
    )

    @classmethod
    def child_type(cls) -> Optional[Type[DefinitionNode]]:
        return Group

    def child_sort_field(self) -> Optional[str]:
        value = self.fields.get("group_sort_order_field")
        return None if is_blank(value) else str(value)

    def describe(self, tag: Any = None) -> str:
        return "this form"

    @property
    def groups(self) -> List["Group"]:
        return self.children  # type: ignore[return-value]


@dataclass
class Group(DefinitionNode):
    kind: ClassVar[str] = "group"
    schema: ClassVar[FieldSchema] = FieldSchema(
        fields={
            "code": FieldSpec(mandatory=True, validator=check_code),
            "name": FieldSpec(mandatory=True),
            "questions": FieldSpec(mandatory=True),
            "description": FieldSpec(),
        },
        children="questions",
    )

    @classmethod
    def child_type(cls) -> Optional[Type[DefinitionNode]]:
        return Question

    @property
    def questions(self) -> List["Question"]:
        return self.children  # type: ignore[return-value]


@dataclass
class Question(DefinitionNode):
    """
    A question; also used for the sub-questions hanging off an answer.

    ``type`` decides how the question is rendered and must be one of
    QUESTION_TYPES. A ``validation`` value names response validators
    (comma separated) that run later against submitted answers; such
    questions are collected in the identifier registry.
    """

    kind: ClassVar[str] = "question"
    schema: ClassVar[FieldSchema] = FieldSchema(
        fields={
            "code": FieldSpec(mandatory=True, validator=check_code),
            "type": FieldSpec(mandatory=True, validator=check_question_type),
            "question": FieldSpec(),
            "sort_order": FieldSpec(mandatory=True),
            "help": FieldSpec(),
            "answers": FieldSpec(),
            "textbox_size": FieldSpec(),
            "textfield_size": FieldSpec(),
            "header": FieldSpec(),
            "selectionbox_multiplechoice": FieldSpec(),
            "validation": FieldSpec(validator=register_deferred_validation),
        },
        children="answers",
    )

    @classmethod
    def child_type(cls) -> Optional[Type[DefinitionNode]]:
        return Answer

    @property
    def question_type(self) -> Optional[str]:
        return self.fields.get("type")

    @property
    def validation_hooks(self) -> List[str]:
        return split_hooks(self.fields.get("validation"))

    @property
    def has_deferred_validation(self) -> bool:
        """True if this question belongs in the registry's deferred validation list."""
        return bool(self.validation_hooks)

    @property
    def answers(self) -> List["Answer"]:
        return self.children  # type: ignore[return-value]


@dataclass
class Answer(DefinitionNode):
    """One possible answer; answer codes only need to be unique per question."""

    kind: ClassVar[str] = "answer"
    uniqueness_mode: ClassVar[UniquenessMode] = UniquenessMode.PARENT_LOCAL
    schema: ClassVar[FieldSchema] = FieldSchema(
        fields={
            "code": FieldSpec(mandatory=True, validator=check_code),
            "answer": FieldSpec(mandatory=True),
            "default": FieldSpec(mandatory=True),
            "sort_order": FieldSpec(mandatory=True),
            "subquestions": FieldSpec(),
        },
        children="subquestions",
    )

    @classmethod
    def child_type(cls) -> Optional[Type[DefinitionNode]]:
        return Question

    @property
    def subquestions(self) -> List[Question]:
        return self.children  # type: ignore[return-value]


# ----------------------------------------------------------------------
# Plain-dict conversion (used by the store)
# ----------------------------------------------------------------------

NODE_TYPES: Dict[str, Type[DefinitionNode]] = {
    FormRoot.kind: FormRoot,
    Group.kind: Group,
    Question.kind: Question,
    Answer.kind: Answer,
}


def node_to_dict(node: DefinitionNode) -> Dict[str, Any]:
    return {
        "kind": node.kind,
        "code": node.code,
        "owner_identifier": node.owner_identifier,
        "identifier": node.identifier,
        "fields": dict(node.fields),
        "children": [node_to_dict(child) for child in node.children],
    }


def node_from_dict(data: Mapping[str, Any]) -> DefinitionNode:
    node_cls = NODE_TYPES.get(data.get("kind"))  # type: ignore[arg-type]
    if node_cls is None:
        raise StructuralError(f"Unknown node kind in stored form: {data.get('kind')!r}")

    return node_cls(
        code=data.get("code"),
        owner_identifier=data.get("owner_identifier") or "",
        identifier=data.get("identifier") or "",
        fields=dict(data.get("fields") or {}),
        children=[node_from_dict(child) for child in data.get("children") or []],
    )
