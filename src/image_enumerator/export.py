"""Append-only export of discovered URLs."""

from __future__ import annotations

from pathlib import Path
from typing import TextIO

from .errors import ExportError
from .models import Discovery


def format_line(discovery: Discovery, *, report_size: bool) -> str:
    """Render one export line: ``URL`` or ``URL SIZE`` when a size is known."""
    if report_size and discovery.size is not None:
        return f"{discovery.url} {discovery.size}\n"
    return f"{discovery.url}\n"


class FileExporter:
    """Hold one append handle for the process lifetime; I/O errors are fatal."""

    def __init__(self, path: str, *, report_size: bool = False) -> None:
        self.path = Path(path)
        self._report_size = report_size
        try:
            self._file: TextIO = self.path.open("a", encoding="utf-8")
        except OSError as exc:
            raise ExportError(f"Cannot open export file {path}: {exc}") from exc

    def consume(self, discovery: Discovery) -> None:
        try:
            self._file.write(format_line(discovery, report_size=self._report_size))
            self._file.flush()
        except (OSError, ValueError) as exc:
            raise ExportError(f"Cannot write to export file {self.path}: {exc}") from exc

    def close(self) -> None:
        try:
            self._file.close()
        except OSError:
            return None
