"""next-boil configuration.

Typed settings for a provisioning run. Every setting is a Pydantic v2 model so
values are validated at construction time. Nothing is read from disk or the
environment; the CLI builds a ``Config`` from its arguments.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from nextboil.models import DEFAULT_PROJECT_NAME, DEFAULT_TEMPLATE


class FetchConfig(BaseModel):
    """Tuning knobs for the template fetcher."""

    max_attempts: int = Field(
        default=3, ge=1, description="Total clone attempts before giving up"
    )
    timeout: float | None = Field(
        default=None,
        gt=0,
        description="Per-request HTTP timeout in seconds (None waits indefinitely)",
    )


class InstallConfig(BaseModel):
    """Settings for the dependency-installation step."""

    preflight: bool = Field(
        default=True,
        description="Check the package manager binary is on PATH before running it",
    )
    inherit_output: bool = Field(
        default=True,
        description="Stream installer output to the terminal instead of capturing it",
    )


class Config(BaseModel):
    """Global next-boil configuration.

    Created once by the CLI entry point (or by a test) and handed to the
    ``Provisioner``, which passes the relevant parts on to each stage.
    """

    default_project_name: str = Field(default=DEFAULT_PROJECT_NAME)
    default_template: str = Field(default=DEFAULT_TEMPLATE)
    debug: bool = Field(default=False)
    fetch: FetchConfig = Field(default_factory=FetchConfig)
    install: InstallConfig = Field(default_factory=InstallConfig)
