"""Post-provision actions run inside the freshly populated project.

``init_git`` and ``install_dependencies`` both raise on failure; whether the
failure is fatal is the provisioner's call, not theirs.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from nextboil.config import InstallConfig
from nextboil.models import PackageManager, ProvisionError, ProvisionStage
from nextboil.reporter import Reporter
from nextboil.utils import describe_command, run_command


class VcsInitError(ProvisionError):
    """Raised when ``git init`` fails."""

    stage = ProvisionStage.VCS_INIT

    def __init__(self, message: str, command: str = "", stderr: str = ""):
        self.command = command
        self.stderr = stderr
        super().__init__(message)


class DependencyInstallError(ProvisionError):
    """Raised when the package manager is missing or its install fails."""

    stage = ProvisionStage.INSTALL

    def __init__(self, message: str, manager: str = "", returncode: int | None = None):
        self.manager = manager
        self.returncode = returncode
        super().__init__(message)


async def init_git(project_path: Path, reporter: Reporter, git_binary: str = "git") -> None:
    """Run ``git init`` in *project_path*.

    Raises:
        VcsInitError: If git is missing or exits non-zero.
    """
    cmd = [git_binary, "init"]
    reporter.info("Initializing git repository...")
    try:
        returncode, _, stderr = await run_command(cmd, cwd=project_path)
    except OSError as exc:
        raise VcsInitError(
            f"'{git_binary}' executable not found or not runnable: {exc}",
            command=describe_command(cmd),
        ) from exc

    if returncode != 0:
        raise VcsInitError(
            f"git init failed (exit {returncode}): {stderr}",
            command=describe_command(cmd),
            stderr=stderr,
        )
    reporter.success("Git repository initialized successfully.")


def install_command(manager: PackageManager) -> list[str]:
    return [manager.value, "install"]


async def install_dependencies(
    project_path: Path,
    manager: PackageManager,
    reporter: Reporter,
    config: InstallConfig | None = None,
) -> None:
    """Run ``<manager> install`` in *project_path*.

    Only the exit status is interpreted. With ``config.preflight`` set, a
    manager that is not on ``PATH`` is reported without spawning anything.

    Raises:
        DependencyInstallError: If the manager is missing or the install fails.
    """
    config = config or InstallConfig()
    cmd = install_command(manager)

    if config.preflight and shutil.which(manager.value) is None:
        raise DependencyInstallError(
            f"Package manager '{manager.value}' was not found on PATH. "
            f"Install it or choose another with --package-manager.",
            manager=manager.value,
        )

    reporter.info(f"Installing dependencies using {manager.value}...")
    try:
        returncode, _, stderr = await run_command(
            cmd, cwd=project_path, capture=not config.inherit_output
        )
    except OSError as exc:
        raise DependencyInstallError(
            f"Failed to install dependencies: '{manager.value}' could not be started.",
            manager=manager.value,
        ) from exc

    if returncode != 0:
        detail = f": {stderr}" if stderr else ""
        raise DependencyInstallError(
            f"Failed to install dependencies: {describe_command(cmd)} exited with {returncode}{detail}",
            manager=manager.value,
            returncode=returncode,
        )
    reporter.success("Dependencies installed successfully.")
