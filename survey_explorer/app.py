from __future__ import annotations

"""
CLI entrypoint for the survey explorer.

This module builds a git-style subcommand CLI (via argparse) and dispatches
execution to action modules.
"""

import argparse
import logging
import sys
from dotenv import load_dotenv

from survey_explorer.actions.base import Action
from survey_explorer.actions.explore import ExploreAction
from survey_explorer.actions.preview import PreviewAction
from survey_explorer.actions.search import SearchAction
from survey_explorer.actions.structure import StructureAction
from survey_explorer.actions.subset import SubsetAction
from survey_explorer.actions.template import TemplateAction
from survey_explorer.config import ConfigError, find_config_path, load_config
from survey_explorer.errors import DatasetError
from survey_explorer.logging_config import configure_logging


logger = logging.getLogger(__name__)


def _action_repository() -> dict[str, Action]:
	"""
	Construct the action registry.

	Returns:
		A mapping from subcommand name to an action instance.
	"""
	actions = [
		TemplateAction(),
		StructureAction(),
		SearchAction(),
		SubsetAction(),
		PreviewAction(),
		ExploreAction(),
	]
	return {a.name: a for a in actions}


def build_parser() -> argparse.ArgumentParser:
	"""
	Build the top-level argument parser.

	The parser uses subcommands (similar to `git`) where each action registers its
	own arguments.

	Returns:
		The configured ArgumentParser instance.
	"""
	parser = argparse.ArgumentParser(
		prog="survey-explorer",
		description=(
			"Explore a survey spreadsheet: list and search its questions and build respondent subsets."
		),
	)
	parser.add_argument(
		"--debug",
		action="store_true",
		help="Log debug details (including tracebacks) to stderr",
	)
	parser.add_argument(
		"--verbose",
		action="store_true",
		help="Log progress information to stderr",
	)
	parser.add_argument(
		"--log-format",
		choices=["json", "plain"],
		help="Log output format (default: $SURVEY_EXPLORER_LOG_FORMAT or json)",
	)

	actions = _action_repository()

	config_parent = argparse.ArgumentParser(add_help=False)
	config_parent.add_argument(
		"--config",
		"-c",
		help=(
			"Path to survey.yaml. If omitted, ./survey.yaml in the current directory is used."
		),
	)
	config_parent.add_argument(
		"--dataset",
		"-d",
		help=(
			"Survey spreadsheet to explore. Overrides the config file and $SURVEY_EXPLORER_DATASET."
		),
	)

	subparsers = parser.add_subparsers(dest="action", metavar="COMMAND", required=True)

	for name, action in actions.items():
		parents = [config_parent] if action.requires_config else []
		sub = subparsers.add_parser(name, help=action.help, parents=parents)
		action.add_arguments(sub)
		sub.set_defaults(_action_name=name)

	return parser


def _log_level(args: argparse.Namespace) -> int:
	if getattr(args, "debug", False):
		return logging.DEBUG
	if getattr(args, "verbose", False):
		return logging.INFO
	return logging.WARNING


def main(argv: list[str] | None = None) -> int:
	"""
	Run the CLI.

	Args:
		argv:
			Optional argument list (without program name). If omitted, argparse
			reads from sys.argv.

	Returns:
		Process exit code. `0` on success, `2` on configuration/usage errors,
		`4` if the survey dataset cannot be read, `130` if interrupted.

	Raises:
		SystemExit:
			When invoked via `python -m survey_explorer.app` (see module guard).
	"""
	load_dotenv()

	parser = build_parser()
	args = parser.parse_args(argv)

	configure_logging(_log_level(args), force_format=getattr(args, "log_format", None))

	try:
		actions = _action_repository()
		action_name = getattr(args, "_action_name", None)
		if not action_name or action_name not in actions:
			parser.error("Unknown or missing command")
			return 2

		action = actions[action_name]

		config = None
		if action.requires_config:
			config_path = find_config_path(getattr(args, "config", None))
			config = load_config(config_path, dataset=getattr(args, "dataset", None))

		action.run(args, config)
		return 0
	except ConfigError as exc:
		print(f"error: {exc}", file=sys.stderr)
		return 2
	except DatasetError as exc:
		logger.debug("Dataset error", exc_info=True)
		print(f"error: {exc}", file=sys.stderr)
		return 4
	except KeyboardInterrupt:
		print("\nAborted.", file=sys.stderr)
		return 130


if __name__ == "__main__":
	raise SystemExit(main())
