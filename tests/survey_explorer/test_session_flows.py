from __future__ import annotations

from pathlib import Path

import pytest

from survey_explorer import cli_io
from survey_explorer.actions import explore as explore_module
from survey_explorer.actions import subset as subset_module
from survey_explorer.actions.explore import ExploreAction
from survey_explorer.actions.subset import SubsetAction
from survey_explorer.config import SchemaConfig, SurveyConfig
from survey_explorer.display import shorten
from survey_explorer.session import AnalysisSession


def _make_csv_session(tmp_path: Path) -> AnalysisSession:
    responses = tmp_path / "responses.csv"
    responses.write_text(
        "ResponseId,Q1\n"
        "1,Python\n"
        "2,JavaScript\n"
        '3,"Python, JavaScript"\n'
        "4,Java\n"
        '5,"C#, Python"\n',
        encoding="utf-8",
    )
    schema = tmp_path / "schema.csv"
    schema.write_text("QuestionID,QuestionText\nQ1,Languages?\n", encoding="utf-8")

    config = SurveyConfig(
        config_path=None,
        base_dir=tmp_path,
        dataset=responses,
        schema=SchemaConfig(file=schema, sheet=0),
    )
    return AnalysisSession.open(config)


def _fake_terminal(monkeypatch, answers: list[str]) -> None:
    replies = iter(answers)
    for module in (cli_io, subset_module, explore_module):
        monkeypatch.setattr(module, "is_interactive_tty", lambda: True)
    monkeypatch.setattr("builtins.input", lambda prompt="": next(replies))


def test_interactive_subset_activates_session_subset(tmp_path, monkeypatch, capsys):
    session = _make_csv_session(tmp_path)
    # Options are sorted: "C#, Python", "Java", "JavaScript", "Python", "Python, JavaScript"
    _fake_terminal(monkeypatch, ["1", "2,3"])

    subset = SubsetAction().create(session)

    assert subset is not None
    assert subset.match_count == 3
    assert session.current_subset is subset
    assert "Subset created successfully with 3 respondents." in capsys.readouterr().out


def test_session_clear_drops_subset(tmp_path):
    session = _make_csv_session(tmp_path)
    subset = SubsetAction().create(session, question_id="Q1", values=["Java"])

    assert session.current_subset is subset
    session.clear()
    assert session.current_subset is None


def test_explore_dispatch_reports_errors(tmp_path, monkeypatch, capsys):
    session = _make_csv_session(tmp_path)
    session.config.dataset.unlink()
    _fake_terminal(monkeypatch, ["1"])

    ExploreAction().dispatch(session, "subset")
    ExploreAction().dispatch(session, "bogus")

    out = capsys.readouterr().out
    assert "error: Survey file not found" in out
    assert "Invalid option selected: bogus" in out


def test_explore_menu_loop(tmp_path, monkeypatch, capsys):
    session = _make_csv_session(tmp_path)
    _fake_terminal(monkeypatch, ["subset", "1", "4", "clear", "exit"])
    monkeypatch.setattr(AnalysisSession, "open", classmethod(lambda cls, config: session))

    ExploreAction().run(type("Args", (), {"page": 1})(), session.config)

    out = capsys.readouterr().out
    assert "Subset created successfully with 3 respondents." in out
    assert "Current active subset: 3 respondents" in out
    assert "Active subset cleared." in out
    assert "Goodbye!" in out
    assert session.current_subset is None


def test_prompt_multi_choice_accepts_numbers_and_keys(monkeypatch):
    _fake_terminal(monkeypatch, ["9", "b 1,1"])

    selected = cli_io.prompt_multi_choice("Pick", [("a", "A"), ("b", "B"), ("c", "C")])

    assert selected == ["a", "b"]


def test_prompts_refuse_non_interactive(monkeypatch):
    monkeypatch.setattr(cli_io, "is_interactive_tty", lambda: False)

    with pytest.raises(RuntimeError):
        cli_io.prompt_choice("Pick", [("a", "A")])


def test_shorten_marks_cut_text():
    assert shorten("abc", 5) == "abc"
    assert shorten("abcdef", 3) == "abc..."
