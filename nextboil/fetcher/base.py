"""Shared pieces for template cloners."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Protocol

from nextboil.fetcher.source import TemplateSource

# Never copied into the destination; a template carries no history.
IGNORED_NAMES = (".git",)


class CloneError(Exception):
    """Raised when a single clone attempt fails."""

    def __init__(self, message: str, source: str = ""):
        self.source = source
        super().__init__(message)


class Cloner(Protocol):
    """Copies a template's file tree into a destination directory."""

    async def clone(self, source: TemplateSource, dest: Path) -> None: ...


def select_subdir(root: Path, source: TemplateSource) -> Path:
    """Return the directory inside *root* the template actually lives in.

    Raises:
        CloneError: If the requested sub-directory is missing.
    """
    if not source.subdir:
        return root
    selected = (root / source.subdir).resolve()
    if not selected.is_relative_to(root.resolve()) or not selected.is_dir():
        raise CloneError(
            f"Sub-directory '{source.subdir}' not found in template {source.describe()}",
            source=source.url,
        )
    return selected


def copy_template_tree(src: Path, dest: Path) -> None:
    """Copy *src* over *dest*, overwriting any file that already exists."""
    shutil.copytree(
        src,
        dest,
        dirs_exist_ok=True,
        ignore=shutil.ignore_patterns(*IGNORED_NAMES),
    )
