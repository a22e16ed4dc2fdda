import json
from pathlib import Path

import yaml
from typer.testing import CliRunner

from form_parser.cli import app
from form_parser.utils import resolve_project_path, tests_data_path

runner = CliRunner()

TESTFORM = str(resolve_project_path("forms/testform.yml"))


def test_validate_ok():
    result = runner.invoke(app, ["validate", TESTFORM])

    assert result.exit_code == 0
    assert "OK" in result.output
    assert "2 groups" in result.output


def test_validate_reports_every_error_and_fails():
    result = runner.invoke(app, ["validate", str(tests_data_path("invalid_form.yml"))])

    assert result.exit_code == 1
    assert "Errors found in form definition" in result.output
    assert "type: Invalid question type invalidtype specified for question age" in result.output
    assert "code: Duplicate answer 'code' found, code must be unique for this question age" in result.output


def test_validate_structural_problem_fails():
    result = runner.invoke(app, ["validate", str(tests_data_path("not_a_form.yml"))])

    assert result.exit_code == 1
    assert "is not a valid form definition" in result.output


def test_stats_counts():
    result = runner.invoke(app, ["stats", TESTFORM])

    assert result.exit_code == 0
    assert "Sub-questions" in result.output
    assert "Deferred validations" in result.output


def test_export_to_file(tmp_path: Path):
    out = tmp_path / "testform.json"

    result = runner.invoke(app, ["export", TESTFORM, "--out", str(out), "--pretty"])

    assert result.exit_code == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["code"] == "testform"
    assert data["counts"] == {
        "groups": 2,
        "questions": 4,
        "subquestions": 1,
        "answers": 7,
        "deferred_validations": 2,
    }
    assert data["form"]["kind"] == "form"
    assert [v["identifier"] for v in data["validations"]] == ["testform~~1~~g1q1", "testform~~1~~g1q2"]


def test_load_builds_then_reuses(tmp_path: Path, scenario_a):
    forms_dir = tmp_path / "forms"
    forms_dir.mkdir()
    (forms_dir / "survey.yml").write_text(yaml.safe_dump(scenario_a), encoding="utf-8")
    args = ["load", "survey", "--forms-dir", str(forms_dir), "--store-dir", str(tmp_path / "store")]

    first = runner.invoke(app, args)
    second = runner.invoke(app, args)

    assert first.exit_code == 0
    assert "built" in first.output
    assert second.exit_code == 0
    assert "stored" in second.output


def test_load_unknown_form_fails(tmp_path: Path):
    result = runner.invoke(app, ["load", "missing", "--forms-dir", str(tmp_path), "--store-dir", str(tmp_path)])

    assert result.exit_code == 1
    assert "not found" in result.output


def test_export_summary_omits_tree():
    result = runner.invoke(app, ["export", TESTFORM, "--summary"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert "form" not in data
    assert data["counts"]["groups"] == 2


def test_stats_and_export_report_invalid_definition():
    invalid = str(tests_data_path("invalid_form.yml"))

    for command in ("stats", "export"):
        result = runner.invoke(app, [command, invalid])

        assert result.exit_code == 1
        assert "Errors found in form definition" in result.output
        assert "type: Invalid question type invalidtype specified for question age" in result.output


def test_export_reports_structural_problem(tmp_path: Path):
    out = tmp_path / "out.json"

    result = runner.invoke(app, ["export", str(tests_data_path("not_a_form.yml")), "--out", str(out)])

    assert result.exit_code == 1
    assert "is not a valid form definition" in result.output
    assert not out.exists()
