"""Git-mode cloner for hosts without a known archive endpoint.

Runs a shallow ``git clone`` into a throwaway directory and copies the work
tree, minus ``.git``, into the destination.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

from nextboil.fetcher.base import CloneError, copy_template_tree, select_subdir
from nextboil.fetcher.source import DEFAULT_REF, TemplateSource
from nextboil.utils import describe_command, run_blocking, run_command


def build_clone_command(source: TemplateSource, target: Path, git_binary: str = "git") -> list[str]:
    cmd = [git_binary, "clone", "--depth", "1", "--quiet"]
    if source.ref != DEFAULT_REF:
        cmd += ["--branch", source.ref]
    cmd += [source.repo_url, str(target)]
    return cmd


class GitCloner:
    """Clones templates with the ``git`` executable."""

    def __init__(self, git_binary: str = "git") -> None:
        self.git_binary = git_binary

    async def clone(self, source: TemplateSource, dest: Path) -> None:
        """Shallow-clone *source* and copy its files over *dest*.

        Raises:
            CloneError: If git is missing or exits non-zero, or the requested
                sub-directory does not exist.
        """
        with tempfile.TemporaryDirectory(prefix="next-boil-") as tmp:
            checkout = Path(tmp) / "checkout"
            cmd = build_clone_command(source, checkout, self.git_binary)
            try:
                returncode, _, stderr = await run_command(cmd)
            except FileNotFoundError as exc:
                raise CloneError(
                    f"'{self.git_binary}' executable not found; cannot clone {source.repo_url}",
                    source=source.url,
                ) from exc

            if returncode != 0:
                raise CloneError(
                    f"Git command failed (exit {returncode}): {describe_command(cmd)}\n{stderr}",
                    source=source.url,
                )

            root = select_subdir(checkout, source)
            await run_blocking(copy_template_tree, root, dest)
