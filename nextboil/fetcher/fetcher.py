"""Template fetching with bounded retry.

Each attempt is a complete, fresh clone into the destination; there is no
resume and no delay between attempts. When the attempt budget runs out the
last underlying error is surfaced as ``FetchError``. Files written by a
failed attempt are left where they are.
"""

from __future__ import annotations

from pathlib import Path

from nextboil.config import FetchConfig
from nextboil.fetcher.base import CloneError, Cloner
from nextboil.fetcher.git import GitCloner
from nextboil.fetcher.source import FetchMode, TemplateSource
from nextboil.fetcher.tarball import TarballCloner
from nextboil.models import ProvisionError, ProvisionStage
from nextboil.reporter import Reporter


class FetchError(ProvisionError):
    """Raised when every clone attempt has failed."""

    stage = ProvisionStage.FETCH

    def __init__(self, message: str, attempts: int, last_error: BaseException | None = None):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(message)


class TemplateFetcher:
    """Clones a template into a directory, retrying on failure.

    Cloners are picked per ``FetchMode``; pass ``cloners`` to override them
    (for instance with a fake in tests).
    """

    def __init__(
        self,
        reporter: Reporter,
        config: FetchConfig | None = None,
        cloners: dict[FetchMode, Cloner] | None = None,
    ) -> None:
        self.reporter = reporter
        self.config = config or FetchConfig()
        self.cloners: dict[FetchMode, Cloner] = cloners or {
            FetchMode.TAR: TarballCloner(timeout=self.config.timeout),
            FetchMode.GIT: GitCloner(),
        }

    async def fetch(self, template_url: str, dest: Path) -> int:
        """Populate *dest* with the template at *template_url*.

        Returns:
            The number of attempts it took.

        Raises:
            FetchError: After ``max_attempts`` consecutive failures.
        """
        source = TemplateSource.parse(template_url)
        cloner = self.cloners[source.mode]
        self.reporter.debug(f"Fetching {source.describe()} in {source.mode.value} mode")

        retries = self.config.max_attempts
        attempt = 0
        while True:
            attempt += 1
            try:
                with self.reporter.status(f"Cloning template from {template_url}..."):
                    await cloner.clone(source, dest)
            except (CloneError, OSError) as exc:
                retries -= 1
                self.reporter.warn(f"Clone failed: {exc}. Retries left: {retries}")
                if retries == 0:
                    raise FetchError(
                        "Failed to clone the repository after "
                        f"{attempt} attempt(s). Check the template URL or your "
                        f"internet connection. Last error: {exc}",
                        attempts=attempt,
                        last_error=exc,
                    ) from exc
                continue

            self.reporter.success(f"Repository cloned into {dest}.")
            return attempt
