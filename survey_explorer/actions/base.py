from __future__ import annotations

"""
Shared action interface.

Every subcommand is an object following the `Action` protocol. The CLI asks
each action to register its arguments and, once parsed, hands the arguments
and the loaded configuration back to `run`.
"""

import argparse
from typing import Protocol

from survey_explorer.config import SurveyConfig
from survey_explorer.session import AnalysisSession


class Action(Protocol):
    """
    Interface for a CLI action (subcommand).

    Attributes:
        name:
            Subcommand name.
        help:
            One-line description shown by `--help`.
        requires_config:
            If True, the CLI resolves `survey.yaml` / `--dataset` before
            calling `run` and passes the result as `config`.
    """

    name: str
    help: str
    requires_config: bool

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        """Register action-specific CLI arguments on the action's subparser."""

    def run(self, args: argparse.Namespace, config: SurveyConfig | None) -> None:
        """
        Execute the action.

        Args:
            args:
                Parsed arguments for this subcommand.
            config:
                Loaded configuration, if `requires_config` is True.
        """


def open_session(action: Action, config: SurveyConfig | None) -> AnalysisSession:
    """
    Start an exploration session for an action that needs the dataset.

    Raises:
        RuntimeError:
            If the CLI did not load a configuration for the action.
    """

    if config is None:
        raise RuntimeError(f"{type(action).__name__} requires a config, but none was provided")
    return AnalysisSession.open(config)
