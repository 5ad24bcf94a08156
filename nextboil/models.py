"""Core data models shared by every provisioning stage.

``ProvisionRequest`` is the operator's input, ``ProvisionResult`` is built up
by the provisioner as stages complete, and ``ProvisionError`` is the root of
the exception hierarchy each stage raises from.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

DEFAULT_PROJECT_NAME = "next-app"
DEFAULT_TEMPLATE = "https://github.com/boddhi9/next-template"


class PackageManager(str, Enum):
    """Supported dependency installers. Closed set, not user-extensible."""

    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"

    @classmethod
    def names(cls) -> list[str]:
        return [member.value for member in cls]


class ProvisionStage(str, Enum):
    """Stage of the provisioning run, in execution order."""

    VALIDATE = "validate"
    RECONCILE = "reconcile"
    FETCH = "fetch"
    VCS_INIT = "vcs_init"
    INSTALL = "install"


class DirectoryState(str, Enum):
    """Filesystem truth about the target path at the moment it was checked."""

    ABSENT = "absent"
    EMPTY = "empty"
    NON_EMPTY = "non_empty"


class ProvisionError(Exception):
    """Base class for every error raised by a provisioning stage."""

    stage: ProvisionStage = ProvisionStage.VALIDATE


class ProvisionRequest(BaseModel):
    """A single request to bootstrap a project.

    Field values are taken as given; ``validate_request`` is what enforces
    the naming, URL, package-manager and base-directory rules.
    """

    project_name: str = Field(default=DEFAULT_PROJECT_NAME)
    template_url: str = Field(default=DEFAULT_TEMPLATE)
    base_dir: Path = Field(default_factory=Path.cwd)
    package_manager: str = Field(default=PackageManager.NPM.value)
    force: bool = Field(default=False)
    skip_git: bool = Field(default=False)

    @property
    def manager(self) -> PackageManager:
        """The package manager as an enum member (only valid after validation)."""
        return PackageManager(self.package_manager)


@dataclass
class ProvisionResult:
    """Outcome of a provisioning run, used for the final report."""

    project_path: Path | None = None
    cloned: bool = False
    vcs_initialized: bool = False
    deps_installed: bool = False
    failure_stage: ProvisionStage | None = None
    aborted: bool = False
    error: str | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.failure_stage is None and not self.aborted

    @property
    def exit_code(self) -> int:
        return 0 if self.success else 1

    def summary(self) -> str:
        """Return a human-readable summary of the result."""
        if self.aborted:
            status = "ABORTED"
        elif self.success:
            status = "SUCCESS"
        else:
            status = f"FAILED ({self.failure_stage.value})"
        lines = [
            f"Status: {status}",
            f"Path: {self.project_path or '-'}",
            f"Cloned: {'yes' if self.cloned else 'no'}",
            f"Git initialized: {'yes' if self.vcs_initialized else 'no'}",
            f"Dependencies installed: {'yes' if self.deps_installed else 'no'}",
        ]
        if self.error:
            lines.append(f"Error: {self.error[:200]}")
        for warning in self.warnings:
            lines.append(f"Warning: {warning[:200]}")
        return "\n".join(lines)
