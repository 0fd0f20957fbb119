"""
Per-session state management for the web UI.

One dataclass, AppState, owns everything the page shows: the current file
selection, the last analysis result, and the loading/error flags. Handlers
receive it by reference; nothing lives at module level.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional

from analysis_result import AnalysisResult
from file_selection import FileSelection, SelectedFile, select_files
from pca_client import ApiConfig


@dataclass
class AppState:
    """Root session state."""

    api: ApiConfig = field(default_factory=ApiConfig)
    selection: FileSelection = field(default_factory=FileSelection)
    result: Optional[AnalysisResult] = None
    loading: bool = False
    error: Optional[str] = None

    @property
    def can_submit(self) -> bool:
        return bool(self.selection) and not self.loading

    def replace_selection(self, candidates: Iterable[SelectedFile]) -> FileSelection:
        """Swap in a new selection; the previous one is discarded."""
        self.selection = select_files(candidates)
        return self.selection
