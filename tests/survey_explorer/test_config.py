from __future__ import annotations

from pathlib import Path

import pytest

from survey_explorer.config import (
    DATASET_ENV_VAR,
    ConfigError,
    DisplayConfig,
    find_config_path,
    load_config,
)


@pytest.fixture(autouse=True)
def _no_dataset_env(monkeypatch):
    monkeypatch.delenv(DATASET_ENV_VAR, raising=False)


def _write_config(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "survey.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_load_config_minimal_uses_defaults(tmp_path):
    path = _write_config(tmp_path, "dataset: data/survey.xlsx\n")

    config = load_config(path)

    assert config.config_path == path.resolve()
    assert config.dataset == (tmp_path / "data" / "survey.xlsx").resolve()
    assert config.responses_sheet == 0
    assert config.max_rows is None
    assert config.schema.sheet == 1
    assert config.schema_file == config.dataset
    assert config.display == DisplayConfig()


def test_load_config_full(tmp_path):
    path = _write_config(
        tmp_path,
        "\n".join(
            [
                "dataset: responses.csv",
                "responses_sheet: Responses",
                "max_rows: 250",
                "schema:",
                "  file: schema.csv",
                "  sheet: 0",
                "  id_column: Code",
                "  text_column: Question",
                "  key_column: Column",
                "display:",
                "  per_page: 10",
                "  preview_limit: 3",
                "  truncate_length: 80",
            ]
        ),
    )

    config = load_config(path)

    assert config.responses_sheet == "Responses"
    assert config.max_rows == 250
    assert config.schema.file == (tmp_path / "schema.csv").resolve()
    assert config.schema_file == config.schema.file
    assert config.schema.sheet == 0
    assert config.schema.id_column == "Code"
    assert config.schema.text_column == "Question"
    assert config.schema.key_column == "Column"
    assert config.display.per_page == 10
    assert config.display.preview_limit == 3
    assert config.display.truncate_length == 80
    assert config.display.preview_columns == 5


def test_load_config_missing_file_without_dataset(tmp_path):
    with pytest.raises(ConfigError, match="template"):
        load_config(tmp_path / "survey.yaml")


def test_load_config_missing_file_with_dataset_override(tmp_path):
    config = load_config(tmp_path / "survey.yaml", dataset=str(tmp_path / "x.xlsx"))

    assert config.config_path is None
    assert config.dataset == (tmp_path / "x.xlsx").resolve()


def test_load_config_env_overrides_file(tmp_path, monkeypatch):
    path = _write_config(tmp_path, "dataset: a.xlsx\n")
    monkeypatch.setenv(DATASET_ENV_VAR, "b.xlsx")

    assert load_config(path).dataset == (tmp_path / "b.xlsx").resolve()
    assert load_config(path, dataset="c.xlsx").dataset == (tmp_path / "c.xlsx").resolve()


@pytest.mark.parametrize(
    "text, message",
    [
        ("- just\n- a list\n", "mapping"),
        ("responses_sheet: 0\n", "dataset"),
        ("dataset: a.xlsx\nresponses_sheet: -1\n", "responses_sheet"),
        ("dataset: a.xlsx\nmax_rows: 0\n", "max_rows"),
        ("dataset: a.xlsx\nschema: [1]\n", "schema"),
        ("dataset: a.xlsx\nschema:\n  id_column: ''\n", "id_column"),
        ("dataset: a.xlsx\ndisplay:\n  per_page: zero\n", "per_page"),
        ("dataset: a.xlsx\ndisplay:\n  preview_limit: 0\n", "preview_limit"),
        ("dataset: [unclosed\n", "Failed to read YAML"),
    ],
)
def test_load_config_rejects_invalid_values(tmp_path, text, message):
    path = _write_config(tmp_path, text)

    with pytest.raises(ConfigError, match=message):
        load_config(path)


def test_find_config_path(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    assert find_config_path(None).resolve() == (tmp_path / "survey.yaml").resolve()
    assert find_config_path("other.yaml") == Path("other.yaml")
