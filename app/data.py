"""Pure data helpers for the Streamlit page. No Streamlit imports."""

from __future__ import annotations

import json
from typing import Any, Iterable, List

from analysis_result import AnalysisResult
from file_selection import SelectedFile


def uploads_to_selected_files(uploads: Iterable[Any]) -> List[SelectedFile]:
    """Convert uploader entries (``.name`` + ``.getvalue()``) to SelectedFile."""
    return [SelectedFile(name=u.name, data=u.getvalue()) for u in uploads or []]


def load_result_json(raw: bytes | str) -> AnalysisResult:
    """Parse a saved result file; raises ValueError when it is not one."""
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Not a JSON file: {exc}") from exc
    return AnalysisResult.from_payload(payload)


def result_to_json(result: AnalysisResult) -> str:
    return json.dumps(result.to_payload(), indent=2)


def format_file_size(n_bytes: int) -> str:
    """Format a byte count the way the file list shows it."""
    if n_bytes < 1024:
        return f"{n_bytes} B"
    return f"{n_bytes / 1024:.0f} KB"
