from __future__ import annotations

import logging

import pytest

from form_parser.core.context import BuildContext
from form_parser.core.exceptions import StructuralError
from form_parser.definition.nodes import (
    Answer,
    FormRoot,
    Group,
    Question,
    decode_section,
    iter_sections,
    node_from_dict,
    node_to_dict,
    sort_nodes,
)
from form_parser.definition.rehydrate import rehydrate
from form_parser.definition.scope import UniquenessMode


def make_ctx() -> BuildContext:
    return BuildContext(logger=logging.getLogger("test_nodes"))


def answer_body(code, sort_order, **extra):
    body = {"code": code, "answer": f"Answer {code}", "default": "N", "sort_order": sort_order}
    body.update(extra)
    return body


def test_decode_section_accepts_pairs_and_single_key_mappings():
    assert decode_section(("age", {"code": "q"})) == ("age", {"code": "q"})
    assert decode_section(["age", None]) == ("age", None)
    assert decode_section({"age": {"code": "q"}}) == ("age", {"code": "q"})


@pytest.mark.parametrize("raw", [None, "age", ("age",), {}, {"a": 1, "b": 2}, ("", {})])
def test_decode_section_rejects_malformed_sections(raw):
    with pytest.raises(StructuralError):
        decode_section(raw)


def test_iter_sections_mapping_and_list_forms():
    assert iter_sections({"a": 1, "b": 2}, "group g") == [("a", 1), ("b", 2)]
    assert iter_sections([{"a": 1}, None, {"b": 2}], "group g") == [{"a": 1}, {"b": 2}]

    with pytest.raises(StructuralError):
        iter_sections("not a collection", "group g")


def test_variant_configuration():
    assert FormRoot.child_type() is Group
    assert Group.child_type() is Question
    assert Question.child_type() is Answer
    assert Answer.child_type() is Question

    assert Answer.uniqueness_mode is UniquenessMode.PARENT_LOCAL
    assert Question.uniqueness_mode is UniquenessMode.FORM_WIDE
    assert Group.uniqueness_mode is UniquenessMode.FORM_WIDE


def test_question_validate_builds_identifier_and_registers_it():
    ctx = make_ctx()
    question = Question(owner_identifier="1")

    errors = question.validate(
        ("age", {"code": "g1q1", "type": "textfield", "sort_order": 1}), ctx, sort_field="sort_order"
    )

    assert errors == []
    assert question.code == "g1q1"
    assert question.identifier == "1~~g1q1"
    assert ctx.registry.get("1~~g1q1") is question
    assert question.fields == {"code": "g1q1", "type": "textfield", "sort_order": 1}


def test_invalid_question_type_is_a_field_error():
    ctx = make_ctx()
    question = Question(owner_identifier="1")

    errors = question.validate(("bad", {"code": "q", "type": "invalidtype", "sort_order": 1}), ctx)

    assert [str(e) for e in errors] == [
        "type: Invalid question type invalidtype specified for question bad"
    ]


def test_answers_are_sorted_by_sort_order():
    ctx = make_ctx()
    question = Question(owner_identifier="1")

    errors = question.validate(
        (
            "q",
            {
                "code": "q",
                "type": "singlechoice",
                "sort_order": 1,
                "answers": {
                    "c": answer_body("c", 3),
                    "a": answer_body("a", 1),
                    "b": answer_body("b", 2),
                },
            },
        ),
        ctx,
    )

    assert errors == []
    assert [a.code for a in question.answers] == ["a", "b", "c"]


def test_sort_is_stable_for_ties():
    nodes = [Answer(code="first"), Answer(code="second"), Answer(code="third")]

    assert [n.code for n in sort_nodes(nodes, [1, 0, 1])] == ["second", "first", "third"]


def test_sort_is_type_aware():
    def by_code(codes):
        nodes = [Group(code=c) for c in codes]
        return [n.code for n in sort_nodes(nodes, list(codes))]

    assert by_code((10, 9, 100)) == [9, 10, 100]
    assert by_code(("10", "9", "100")) == ["10", "100", "9"]
    assert by_code(("b", 2, "a", 1)) == [1, 2, "a", "b"]


def test_children_not_sorted_when_errors_present():
    ctx = make_ctx()
    question = Question(owner_identifier="1")

    errors = question.validate(
        (
            "q",
            {
                "code": "q",
                "type": "singlechoice",
                "sort_order": 1,
                "answers": {
                    "b": answer_body("b", 2),
                    "a": {"code": "a", "sort_order": 1},  # missing answer/default
                },
            },
        ),
        ctx,
    )

    assert errors
    assert [a.code for a in question.answers] == ["b", "a"]


def test_blank_child_collection_means_no_children():
    ctx = make_ctx()
    question = Question(owner_identifier="1")

    errors = question.validate(("q", {"code": "q", "type": "textbox", "sort_order": 1, "answers": {}}), ctx)

    assert errors == []
    assert question.children == []


def test_sub_questions_reuse_question_type_and_nest_identifiers():
    ctx = make_ctx()
    answer = Answer(owner_identifier="1~~g1q2")

    errors = answer.validate(
        (
            "other",
            answer_body(
                "2",
                1,
                subquestions={
                    "other_use": {"code": "g1q2a2s1", "type": "textfield", "sort_order": 1},
                },
            ),
        ),
        ctx,
        sort_field="sort_order",
    )

    assert errors == []
    (sub,) = answer.subquestions
    assert isinstance(sub, Question)
    assert sub.identifier == "1~~g1q2~~2~~g1q2a2s1"
    assert ctx.registry.get(sub.identifier) is sub


def test_validation_field_registers_deferred_hook():
    ctx = make_ctx()
    question = Question(owner_identifier="1")

    question.validate(
        ("q", {"code": "q", "type": "textbox", "sort_order": 1, "validation": "validate_mandatory_question"}),
        ctx,
    )

    assert ctx.registry.validations == [question]
    assert question.validation_hooks == ["validate_mandatory_question"]


def test_non_scalar_code_is_reported_not_crashing():
    ctx = make_ctx()
    group = Group()

    errors = group.validate(
        (
            "g",
            {
                "code": "1",
                "name": "G",
                "questions": {
                    "q": {"code": ["a", "b"], "type": "textbox", "sort_order": 1},
                },
            },
        ),
        ctx,
    )

    assert any(e.field == "code" and "code must be a single value" in e.message for e in errors)


def test_node_dict_round_trip_preserves_structure():
    ctx = make_ctx()
    question = Question(owner_identifier="1")
    question.validate(
        ("q", {"code": "q", "type": "singlechoice", "sort_order": 1, "answers": {"a": answer_body("a", 1)}}),
        ctx,
    )

    data = node_to_dict(question)
    assert data["kind"] == "question"
    assert data["children"][0]["kind"] == "answer"

    restored = node_from_dict(data)
    assert restored == question
    assert restored is not question


def test_node_from_dict_rejects_unknown_kind():
    with pytest.raises(StructuralError):
        node_from_dict({"kind": "widget"})


@pytest.mark.parametrize("value", [",", " , ,"])
def test_validation_value_without_hook_names_is_a_field_error(value):
    ctx = make_ctx()
    question = Question(owner_identifier="1")

    errors = question.validate(
        ("q", {"code": "q", "type": "textbox", "sort_order": 1, "validation": value}), ctx
    )

    assert [e.field for e in errors] == ["validation"]
    assert "no validation names given" in errors[0].message
    assert ctx.registry.validations == []
    assert not question.has_deferred_validation


def test_deferred_validation_rule_is_shared_with_rehydrate():
    ctx = make_ctx()
    question = Question(owner_identifier="1")
    question.validate(
        ("q", {"code": "q", "type": "textbox", "sort_order": 1, "validation": " validate_a ,"}), ctx
    )

    assert question.has_deferred_validation
    assert question.validation_hooks == ["validate_a"]
    assert rehydrate(FormRoot(children=[question])).registry.validations == ctx.registry.validations
