"""
File selection for the upload page.

A selection event (drop or file picker) replaces the whole selection with
the files whose name carries the point-cloud suffix. Nothing is merged.
"""
import logging
from dataclasses import dataclass, field
from typing import Iterable, Tuple

logger = logging.getLogger(__name__)

XYZ_SUFFIX = ".xyz"


@dataclass(frozen=True)
class SelectedFile:
    """One user-selected file: its name and raw bytes."""
    name: str
    data: bytes = field(repr=False)

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class FileSelection:
    """Result of one selection event."""
    files: Tuple[SelectedFile, ...] = ()
    rejected: Tuple[str, ...] = ()

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.files)

    def __bool__(self) -> bool:
        return bool(self.files)

    def __len__(self) -> int:
        return len(self.files)


def select_files(
    candidates: Iterable[SelectedFile], suffix: str = XYZ_SUFFIX
) -> FileSelection:
    """Keep the candidates whose name ends with *suffix*, in input order.

    Matching is case-sensitive. Names that fail the filter are reported in
    ``FileSelection.rejected`` so the caller can tell the user about them.
    """
    accepted = []
    rejected = []
    for candidate in candidates:
        if candidate.name.endswith(suffix):
            accepted.append(candidate)
        else:
            rejected.append(candidate.name)

    if rejected:
        logger.debug("Ignoring %d file(s) without %s: %s",
                     len(rejected), suffix, ", ".join(rejected))
    return FileSelection(files=tuple(accepted), rejected=tuple(rejected))
