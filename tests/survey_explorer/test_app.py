from __future__ import annotations

from pathlib import Path

import pytest
from openpyxl import Workbook

from survey_explorer.app import build_parser, main
from survey_explorer.config import DATASET_ENV_VAR


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    monkeypatch.delenv(DATASET_ENV_VAR, raising=False)
    monkeypatch.chdir(tmp_path)


def _make_survey(tmp_path: Path) -> Path:
    wb = Workbook()
    responses = wb.active
    responses.title = "Responses"
    for row in [
        ["ResponseId", "Q1", "Q2"],
        ["1", "Python", "5-10 years"],
        ["2", "JavaScript", "1-5 years"],
        ["3", "Python, JavaScript", "10+ years"],
        ["4", "Java", "1-5 years"],
        ["5", "C#, Python", "5-10 years"],
    ]:
        responses.append(row)

    schema = wb.create_sheet("Schema")
    for row in [
        ["QuestionID", "QuestionText"],
        ["Q1", "What programming languages do you use regularly?"],
        ["Q2", "How many years of experience do you have?"],
    ]:
        schema.append(row)

    path = tmp_path / "so_survey.xlsx"
    wb.save(path)
    return path


def _write_config(tmp_path: Path) -> Path:
    _make_survey(tmp_path)
    path = tmp_path / "survey.yaml"
    path.write_text("dataset: so_survey.xlsx\n", encoding="utf-8")
    return path


def test_parser_registers_all_commands():
    parser = build_parser()

    for command in ("template", "structure", "search", "subset", "preview", "explore"):
        args = parser.parse_args([command] if command != "search" else [command, "x"])
        assert args._action_name == command


def test_template_writes_config_and_refuses_overwrite(tmp_path, capsys):
    assert main(["template"]) == 0
    assert (tmp_path / "survey.yaml").read_text(encoding="utf-8").startswith("# Survey export")

    assert main(["template"]) == 2
    assert "Refusing to overwrite" in capsys.readouterr().err

    assert main(["template", "--force"]) == 0


def test_structure_lists_questions(tmp_path, capsys):
    _write_config(tmp_path)

    assert main(["structure"]) == 0

    out = capsys.readouterr().out
    assert "Survey Structure" in out
    assert "Q1" in out and "Q2" in out
    assert "Page 1 of 1" in out


def test_search_finds_questions(tmp_path, capsys):
    _write_config(tmp_path)

    assert main(["search", "experience"]) == 0
    out = capsys.readouterr().out
    assert "Found 1 results for 'experience'" in out

    assert main(["search", "salary"]) == 0
    assert "No results found for 'salary'." in capsys.readouterr().out


def test_search_requires_term_when_not_interactive(tmp_path, capsys):
    _write_config(tmp_path)

    assert main(["search"]) == 2
    assert "search term" in capsys.readouterr().err


def test_subset_single_value(tmp_path, capsys):
    _write_config(tmp_path)

    assert main(["subset", "--question", "Q1", "--value", "Python"]) == 0

    out = capsys.readouterr().out
    assert "Subset created successfully with 3 respondents." in out
    assert "Sample of the subset (first 3 respondents)" in out


def test_subset_multiple_values(tmp_path, capsys):
    _write_config(tmp_path)

    assert main(["subset", "-q", "Q1", "-v", "JavaScript", "-v", "Java"]) == 0
    assert "with 3 respondents" in capsys.readouterr().out


def test_subset_without_matches(tmp_path, capsys):
    _write_config(tmp_path)

    assert main(["subset", "-q", "Q1", "-v", "Ruby"]) == 0
    assert "No respondents match the selected criteria." in capsys.readouterr().out

    assert main(["subset", "-q", "Q99", "-v", "Any value"]) == 0
    assert "No respondents match the selected criteria." in capsys.readouterr().out


def test_subset_list_values(tmp_path, capsys):
    _write_config(tmp_path)

    assert main(["subset", "-q", "Q2", "--list-values"]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines == ["1-5 years", "10+ years", "5-10 years"]


def test_subset_requires_values_when_not_interactive(tmp_path, capsys):
    _write_config(tmp_path)

    assert main(["subset", "-q", "Q1"]) == 2
    assert "--value is required" in capsys.readouterr().err


def test_subset_requires_question_when_not_interactive(tmp_path, capsys):
    _write_config(tmp_path)

    assert main(["subset"]) == 2
    assert "--question is required" in capsys.readouterr().err


def test_preview_reads_first_rows(tmp_path, capsys):
    _write_config(tmp_path)

    assert main(["preview", "--limit", "2"]) == 0

    out = capsys.readouterr().out
    assert "Worksheets: Responses, Schema" in out
    assert "Successfully imported 2 rows" in out


def test_dataset_option_works_without_config(tmp_path, capsys):
    path = _make_survey(tmp_path)

    assert main(["subset", "--dataset", str(path), "-q", "Q2", "-v", "1-5"]) == 0
    assert "with 2 respondents" in capsys.readouterr().out


def test_missing_config_is_a_usage_error(capsys):
    assert main(["structure"]) == 2
    assert "No survey.yaml found" in capsys.readouterr().err


def test_missing_dataset_is_reported(tmp_path, capsys):
    assert main(["structure", "--dataset", str(tmp_path / "missing.xlsx")]) == 4
    assert "Survey file not found" in capsys.readouterr().err


def test_explore_requires_a_terminal(tmp_path, capsys):
    _write_config(tmp_path)

    assert main(["explore"]) == 2
    assert "interactive terminal" in capsys.readouterr().err
