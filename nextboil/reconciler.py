"""Target-directory reconciliation.

Decides what has to happen to the project path before a template is fetched
into it: create it, use it as-is, refuse, or ask the operator first.

The existence check and the follow-up action are not atomic and no lock is
taken, so another process changing the path in between goes unnoticed.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from nextboil.models import DirectoryState, ProvisionError, ProvisionStage
from nextboil.prompts import Confirmer
from nextboil.reporter import Reporter


class DirectoryConflictError(ProvisionError):
    """Raised when the target exists with content and force was not given."""

    stage = ProvisionStage.RECONCILE

    def __init__(self, message: str, path: Path):
        self.path = path
        super().__init__(message)


class UserDeclinedError(ProvisionError):
    """Raised when the operator answers no to the force-overwrite warning.

    Not a failure as such: the run stops without an error message.
    """

    stage = ProvisionStage.RECONCILE

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Overwrite of {path} declined.")


class Reconciliation(str, Enum):
    """What the reconciler did with the target path."""

    CREATED = "created"
    PROCEED_EMPTY = "proceed_empty"
    PROCEED_FORCED = "proceed_forced"


def resolve_project_path(base_dir: str | Path, project_name: str) -> Path:
    """Absolute project path; an absolute *project_name* wins over *base_dir*."""
    name_path = Path(project_name)
    if name_path.is_absolute():
        return name_path
    return (Path(base_dir) / name_path).resolve()


def inspect_directory(path: Path) -> DirectoryState:
    """Classify *path* right now. Never cached.

    Raises:
        DirectoryConflictError: If *path* exists but is not a directory.
    """
    if not path.exists():
        return DirectoryState.ABSENT
    if not path.is_dir():
        raise DirectoryConflictError(
            f'"{path}" already exists and is not a directory.', path
        )
    if any(path.iterdir()):
        return DirectoryState.NON_EMPTY
    return DirectoryState.EMPTY


def reconcile_directory(
    path: Path,
    force: bool,
    confirmer: Confirmer,
    reporter: Reporter,
    display_name: str | None = None,
) -> Reconciliation:
    """Make *path* ready to receive a template.

    Performs at most one of: create the directory, raise, or ask for
    confirmation. Existing content is never deleted here; overwriting is
    left to the fetcher.

    Args:
        path: Absolute target path.
        force: Whether the operator allowed a non-empty target.
        confirmer: Asked before proceeding into a non-empty target.
        reporter: Progress sink.
        display_name: Name used in messages (defaults to *path*).

    Raises:
        DirectoryConflictError: Non-empty target without *force*.
        UserDeclinedError: Operator declined the overwrite warning.
    """
    label = display_name or str(path)
    state = inspect_directory(path)
    reporter.debug(f"Target {path} is {state.value}")

    if state is DirectoryState.ABSENT:
        path.mkdir(parents=True, exist_ok=True)
        reporter.debug(f"Created {path}")
        return Reconciliation.CREATED

    if state is DirectoryState.EMPTY:
        return Reconciliation.PROCEED_EMPTY

    if not force:
        raise DirectoryConflictError(
            f'Directory "{label}" already exists and is not empty. '
            "Use the --force flag to override.",
            path,
        )

    if not confirmer.confirm(
        f'Warning: Force mode will overwrite files in "{label}". Continue?'
    ):
        raise UserDeclinedError(path)
    return Reconciliation.PROCEED_FORCED
