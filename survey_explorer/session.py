# Survey Explorer
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Exploration session state.

The interactive shell keeps a little state between menu choices: the loaded
dataset (read-only once loaded) and the subset built last. Both live in an
explicit session object that is handed to every flow.
"""

from dataclasses import dataclass

from survey_explorer.config import SurveyConfig
from survey_explorer.dataset import SurveyDataset
from survey_explorer.subset import Subset


@dataclass
class AnalysisSession:
    """
    State of one exploration session.

    Attributes:
        config:
            Loaded configuration.
        dataset:
            Dataset access object (caches schema and responses).
        current_subset:
            Subset built last, if any. Not persisted.
    """

    config: SurveyConfig
    dataset: SurveyDataset
    current_subset: Subset | None = None

    @classmethod
    def open(cls, config: SurveyConfig) -> AnalysisSession:
        """Start a session for the configured dataset. Nothing is read yet."""

        return cls(config=config, dataset=SurveyDataset(config))

    def activate(self, subset: Subset) -> None:
        self.current_subset = subset

    def clear(self) -> None:
        self.current_subset = None
