"""next-boil provisioning orchestrator.

Runs the stages of a single bootstrap in strict order:

1. VALIDATE  -- project name, package manager, template URL, base directory.
2. RECONCILE -- create, reuse or (after confirmation) overwrite the target.
3. FETCH     -- clone the template with bounded retry.
4. VCS_INIT  -- ``git init`` (best effort, failure only warns).
5. INSTALL   -- ``<pm> install`` (failure is fatal).

Usage::

    next-boil my-app
    python -m nextboil.provisioner my-app --package-manager pnpm
"""

from __future__ import annotations

import asyncio
import sys
import time
import traceback
from pathlib import Path

from nextboil.actions import VcsInitError, init_git, install_dependencies
from nextboil.config import Config
from nextboil.fetcher import TemplateFetcher
from nextboil.models import PackageManager, ProvisionError, ProvisionRequest, ProvisionResult, ProvisionStage
from nextboil.prompts import Confirmer, ConsoleConfirmer
from nextboil.reconciler import UserDeclinedError, reconcile_directory, resolve_project_path
from nextboil.reporter import Reporter, RichReporter
from nextboil.utils import format_duration
from nextboil.validator import validate_request


class Provisioner:
    """Drives one provisioning run and reports its outcome.

    Attributes:
        config: Run configuration.
        reporter: Where progress and errors are written.
        confirmer: Answers the force-overwrite question.
        fetcher: Template fetcher (built from ``config.fetch`` if omitted).
    """

    def __init__(
        self,
        config: Config | None = None,
        reporter: Reporter | None = None,
        confirmer: Confirmer | None = None,
        fetcher: TemplateFetcher | None = None,
    ) -> None:
        self.config = config or Config()
        self.reporter = reporter or RichReporter(verbose=self.config.debug)
        self.confirmer = confirmer or ConsoleConfirmer()
        self.fetcher = fetcher or TemplateFetcher(self.reporter, self.config.fetch)

    async def run(self, request: ProvisionRequest) -> ProvisionResult:
        """Execute every stage for *request*.

        Never raises for stage failures; the returned result carries the
        failing stage and ``exit_code``.
        """
        started = time.monotonic()
        result = ProvisionResult()
        stage = ProvisionStage.VALIDATE

        self.reporter.banner("next-boil", "Your Next.js launchpad")

        try:
            request = validate_request(request)
            project_path = resolve_project_path(request.base_dir, request.project_name)
            result.project_path = project_path

            stage = ProvisionStage.RECONCILE
            outcome = reconcile_directory(
                project_path,
                request.force,
                self.confirmer,
                self.reporter,
                display_name=request.project_name,
            )
            self.reporter.debug(f"Reconciliation: {outcome.value}")

            stage = ProvisionStage.FETCH
            await self.fetcher.fetch(request.template_url, project_path)
            result.cloned = True

            if not request.skip_git:
                stage = ProvisionStage.VCS_INIT
                try:
                    await init_git(project_path, self.reporter)
                    result.vcs_initialized = True
                except VcsInitError as exc:
                    warning = (
                        f"Git initialization failed ({exc}). "
                        "You may need to initialize git manually."
                    )
                    result.warnings.append(warning)
                    self.reporter.warn(warning)

            stage = ProvisionStage.INSTALL
            await install_dependencies(
                project_path, request.manager, self.reporter, self.config.install
            )
            result.deps_installed = True

        except UserDeclinedError:
            result.aborted = True
            self.reporter.info("Operation aborted.")
            return result

        except ProvisionError as exc:
            result.failure_stage = exc.stage
            result.error = str(exc)
            self._report_failure(exc)
            return result

        except Exception as exc:
            result.failure_stage = stage
            result.error = str(exc) or type(exc).__name__
            self._report_failure(exc)
            return result

        finally:
            self.reporter.debug(f"Final result:\n{result.summary()}")

        self._print_final_summary(request, result, time.monotonic() - started)
        return result

    def _report_failure(self, exc: BaseException) -> None:
        self.reporter.error("Project setup failed.")
        if self.config.debug:
            self.reporter.error(traceback.format_exc().rstrip())
        else:
            self.reporter.error(f"Error: {exc}")

    def _print_final_summary(
        self, request: ProvisionRequest, result: ProvisionResult, elapsed: float
    ) -> None:
        """Print the setup summary and next steps."""
        if result.vcs_initialized:
            git_status = "initialized"
        elif request.skip_git:
            git_status = "skipped"
        else:
            git_status = "failed (see warning)"

        self.reporter.summary(
            {
                "Project Name": request.project_name,
                "Location": str(result.project_path),
                "Template": request.template_url,
                "Package Manager": request.package_manager,
                "Git": git_status,
                "Duration": format_duration(elapsed),
            },
            title="Setup Summary",
        )
        self.reporter.success("Project setup completed successfully!")
        self.reporter.info("Next steps:")
        self.reporter.info(f"  cd {request.project_name}")
        self.reporter.info(f"  {request.package_manager} run dev")


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def build_parser(config: Config | None = None):
    """Build the ``next-boil`` argument parser."""
    import argparse

    from nextboil import __version__

    config = config or Config()
    parser = argparse.ArgumentParser(
        prog="next-boil",
        description="A CLI to bootstrap your Next.js starter pack",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  next-boil my-next-app\n"
            "  next-boil my-next-app --force\n"
            "  next-boil my-next-app --template https://github.com/user/custom-template\n"
            "  next-boil my-next-app --base-dir ~/projects\n"
            "  next-boil my-next-app --package-manager yarn\n"
            "  next-boil my-next-app --no-git\n"
        ),
    )

    parser.add_argument(
        "project_name",
        nargs="?",
        default=config.default_project_name,
        metavar="project-name",
        help=f"Name of the project directory (default: {config.default_project_name})",
    )
    parser.add_argument(
        "--force", "-f",
        action="store_true",
        help="Force creation even if directory exists and is not empty",
    )
    parser.add_argument(
        "--template", "-t",
        default=config.default_template,
        metavar="URL",
        help=f"Custom template repository URL (default: {config.default_template})",
    )
    parser.add_argument(
        "--base-dir", "-b",
        default=None,
        metavar="PATH",
        help="Base directory for project creation (default: current directory)",
    )
    parser.add_argument(
        "--package-manager", "-p",
        default=PackageManager.NPM.value,
        metavar="{" + ",".join(PackageManager.names()) + "}",
        help="Package manager to use (default: npm)",
    )
    parser.add_argument(
        "--no-git",
        dest="git",
        action="store_false",
        help="Skip git initialization",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show detailed error stack for debugging",
    )
    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``next-boil`` and ``python -m nextboil.provisioner``."""
    argv = sys.argv[1:] if argv is None else argv
    parser = build_parser()

    if not argv:
        parser.print_help()
        return

    args = parser.parse_args(argv)

    config = Config(debug=args.debug)
    request = ProvisionRequest(
        project_name=args.project_name,
        template_url=args.template,
        base_dir=Path(args.base_dir).expanduser() if args.base_dir else Path.cwd(),
        package_manager=args.package_manager,
        force=args.force,
        skip_git=not args.git,
    )

    provisioner = Provisioner(config)
    result = asyncio.run(provisioner.run(request))
    if result.exit_code != 0:
        sys.exit(result.exit_code)


if __name__ == "__main__":
    main()
