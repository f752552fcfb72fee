"""Directory listings labelled as ``[DIR]`` or ``[FILE]`` entries."""

from __future__ import annotations

import os
from pathlib import Path

DIR_PREFIX = "[DIR]"
FILE_PREFIX = "[FILE]"


def label_for(name: str) -> str:
    """Label an entry name: names containing a dot are files, others directories."""
    if "." in name:
        return f"{FILE_PREFIX}{name}"
    return f"{DIR_PREFIX}{name}"


def name_from_label(label: str) -> str:
    """Strip the ``[DIR]`` or ``[FILE]`` prefix from a label."""
    for prefix in (DIR_PREFIX, FILE_PREFIX):
        if label.startswith(prefix):
            return label[len(prefix):]
    raise ValueError(f"not a listing label: {label!r}")


def scan_directory(path: str | os.PathLike[str]) -> list[str]:
    """Return labels for the visible entries of a directory, in directory order."""
    with os.scandir(path) as entries:
        return [label_for(entry.name) for entry in entries if not entry.name.startswith(".")]


class DirectoryBrowser:
    """Keeps a current directory and its labelled listing."""

    def __init__(self, root: str | os.PathLike[str]) -> None:
        self.path = Path(root)
        self.entries: list[str] = []
        self.refresh()

    def refresh(self) -> list[str]:
        """Rescan the current directory."""
        self.entries = scan_directory(self.path)
        return self.entries

    def descend(self, index: int) -> list[str]:
        """Move into the entry at ``index`` and rescan; state is kept on failure."""
        if index < 0 or index >= len(self.entries):
            raise IndexError(f"no entry at index {index}")
        target = self.path / name_from_label(self.entries[index])
        entries = scan_directory(target)
        self.path = target
        self.entries = entries
        return entries

    def format(self) -> str:
        """Render the listing one entry per line."""
        return "".join(f"{entry}\n" for entry in self.entries)