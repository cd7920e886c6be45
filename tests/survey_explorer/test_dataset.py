from __future__ import annotations

import csv
from pathlib import Path

import pytest
from openpyxl import Workbook

from survey_explorer.config import SchemaConfig, SurveyConfig, default_config
from survey_explorer.dataset import SurveyDataset, cell_text, detect_schema_columns
from survey_explorer.errors import DatasetError
from survey_explorer.subset import build_subset, distinct_values


RESPONSES = [
    ["ResponseId", "LanguageHaveWorkedWith", "YearsCode", None],
    [1, "Python;JavaScript", 5, "ignored"],
    [None, None, None, None],
    [2, "Java", 12.0, None],
    [3, "C#;Python", None, None],
]

SCHEMA = [
    ["QID", "QuestionID", "QuestionText", "AnswerType"],
    ["QID1", "LanguageHaveWorkedWith", "Which programming languages have you used?", "MC"],
    ["QID2", "YearsCode", "How many years have you been coding?", "SR"],
    ["QID3", None, "Orphan row without identifier", "SR"],
    ["QID4", "YearsCode", "Duplicate definition", "SR"],
]


def _make_xlsx(tmp_path: Path) -> Path:
    wb = Workbook()
    ws = wb.active
    ws.title = "Responses"
    for row in RESPONSES:
        ws.append(row)

    schema = wb.create_sheet("Schema")
    for row in SCHEMA:
        schema.append(row)

    path = tmp_path / "survey.xlsx"
    wb.save(path)
    return path


def _write_csv(path: Path, rows: list[list[object]]) -> Path:
    with path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.writer(handle)
        for row in rows:
            writer.writerow(["" if v is None else v for v in row])
    return path


def test_xlsx_responses_skip_empty_rows_and_headerless_columns(tmp_path):
    dataset = SurveyDataset(default_config(_make_xlsx(tmp_path)))

    responses = dataset.responses()

    assert [r["ResponseId"] for r in responses] == ["1", "2", "3"]
    assert list(responses[0].keys()) == ["ResponseId", "LanguageHaveWorkedWith", "YearsCode"]
    assert responses[1]["YearsCode"] == "12"
    assert responses[2]["YearsCode"] is None


def test_xlsx_schema_detects_columns_and_keeps_first_duplicate(tmp_path):
    dataset = SurveyDataset(default_config(_make_xlsx(tmp_path)))

    schema = dataset.schema()

    assert [q.identifier for q in schema] == ["LanguageHaveWorkedWith", "YearsCode", "YearsCode"]
    assert schema[0].label == "Which programming languages have you used?"
    assert schema[0].raw_column_key == "LanguageHaveWorkedWith"
    assert schema[0].attributes["AnswerType"] == "MC"
    assert dataset.question("YearsCode").label == "How many years have you been coding?"
    assert dataset.question("Missing") is None


def test_schema_rows_are_the_raw_sheet(tmp_path):
    dataset = SurveyDataset(default_config(_make_xlsx(tmp_path)))

    rows = dataset.schema_rows()

    assert len(rows) == 4
    assert rows[2]["QuestionID"] is None


def test_responses_are_cached_and_streaming_is_not(tmp_path):
    dataset = SurveyDataset(default_config(_make_xlsx(tmp_path)))

    assert dataset.responses() is dataset.responses()
    assert list(dataset.iter_responses()) == list(dataset.iter_responses())


def test_max_rows_limits_responses(tmp_path):
    config = SurveyConfig(config_path=None, base_dir=tmp_path, dataset=_make_xlsx(tmp_path), max_rows=2)

    responses = SurveyDataset(config).responses()

    assert [r["ResponseId"] for r in responses] == ["1", "2"]


def test_dataset_feeds_subset_engine(tmp_path):
    dataset = SurveyDataset(default_config(_make_xlsx(tmp_path)))

    values = distinct_values(dataset.iter_responses(), "LanguageHaveWorkedWith")
    subset = build_subset(dataset.responses(), "LanguageHaveWorkedWith", "python")

    assert values == ["C#", "Java", "JavaScript", "Python"]
    assert [r["ResponseId"] for r in subset.records] == ["1", "3"]


def test_csv_dataset_with_separate_schema_and_key_column(tmp_path):
    responses = _write_csv(
        tmp_path / "responses.csv",
        [["id", "lang_col"], ["1", "Python"], ["2", "Go"]],
    )
    schema = _write_csv(
        tmp_path / "schema.csv",
        [["Code", "Question", "Column"], ["Q1", "Languages?", "lang_col"]],
    )
    config = SurveyConfig(
        config_path=None,
        base_dir=tmp_path,
        dataset=responses,
        schema=SchemaConfig(file=schema, sheet=0, key_column="Column"),
    )
    dataset = SurveyDataset(config)

    question = dataset.question("Q1")

    assert question.label == "Languages?"
    assert question.raw_column_key == "lang_col"
    assert build_subset(dataset.responses(), question.raw_column_key, "go").match_count == 1


def test_configured_schema_columns_must_exist(tmp_path):
    config = SurveyConfig(
        config_path=None,
        base_dir=tmp_path,
        dataset=_make_xlsx(tmp_path),
        schema=SchemaConfig(id_column="Nope"),
    )

    with pytest.raises(DatasetError, match="Nope"):
        SurveyDataset(config).schema()


def test_missing_file_raises_dataset_error(tmp_path):
    dataset = SurveyDataset(default_config(tmp_path / "missing.xlsx"))

    with pytest.raises(DatasetError, match="not found"):
        dataset.responses()


def test_unknown_sheet_raises_dataset_error(tmp_path):
    config = SurveyConfig(config_path=None, base_dir=tmp_path, dataset=_make_xlsx(tmp_path), responses_sheet="Nope")

    with pytest.raises(DatasetError, match="Nope"):
        SurveyDataset(config).responses()


def test_single_sheet_workbook_has_no_schema_sheet(tmp_path):
    wb = Workbook()
    wb.active.append(["ResponseId"])
    path = tmp_path / "single.xlsx"
    wb.save(path)

    with pytest.raises(DatasetError, match="out of range"):
        SurveyDataset(default_config(path)).schema()


def test_empty_sheet_yields_empty_sequences(tmp_path):
    responses = _write_csv(tmp_path / "empty.csv", [])
    config = SurveyConfig(
        config_path=None,
        base_dir=tmp_path,
        dataset=responses,
        schema=SchemaConfig(sheet=0),
    )
    dataset = SurveyDataset(config)

    assert dataset.responses() == []
    assert dataset.schema() == []


def test_unsupported_format(tmp_path):
    path = tmp_path / "survey.sav"
    path.write_bytes(b"")

    with pytest.raises(DatasetError, match="Unsupported"):
        SurveyDataset(default_config(path)).responses()


def test_cell_text_normalization():
    assert cell_text(None) is None
    assert cell_text("   ") is None
    assert cell_text(" a ") == " a "
    assert cell_text(3.0) == "3"
    assert cell_text(3.5) == "3.5"
    assert cell_text(True) == "TRUE"


def test_detect_schema_columns_falls_back_to_first_two():
    assert detect_schema_columns(["qid", "QuestionID", "QuestionText"]) == ("QuestionID", "QuestionText")
    assert detect_schema_columns(["Code", "Question", "Type"]) == ("Code", "Question")
    assert detect_schema_columns(["Code"]) == ("Code", None)
