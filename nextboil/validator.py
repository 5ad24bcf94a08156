"""Input validation for provisioning requests.

Each rule is a small function returning an error message (or ``None``).
``validate_request`` runs every rule, so the raised ``ValidationError``
carries all problems at once; its message is the first one found.
"""

from __future__ import annotations

import re
from pathlib import Path

from nextboil.models import PackageManager, ProvisionError, ProvisionRequest, ProvisionStage

PROJECT_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")
TEMPLATE_URL_PATTERN = re.compile(r"^https?://\S+$")


class ValidationError(ProvisionError):
    """Raised when a request breaks one or more input rules."""

    stage = ProvisionStage.VALIDATE

    def __init__(self, problems: list[str]):
        self.problems = list(problems)
        super().__init__(self.problems[0] if self.problems else "Invalid request")


def check_project_name(name: str) -> str | None:
    if PROJECT_NAME_PATTERN.fullmatch(name):
        return None
    return (
        f'Invalid project name "{name}". Only letters, numbers, dashes, '
        "and underscores are allowed."
    )


def check_package_manager(manager: str) -> str | None:
    if manager in PackageManager.names():
        return None
    return (
        f'Invalid package manager "{manager}". '
        f"Use one of: {', '.join(PackageManager.names())}"
    )


def check_template_url(url: str) -> str | None:
    if TEMPLATE_URL_PATTERN.fullmatch(url):
        return None
    return f'Invalid template URL: "{url}". Provide a valid http(s) URL.'


def check_base_dir(base_dir: str | Path) -> str | None:
    """Existence only; write access surfaces later as an I/O failure."""
    if Path(base_dir).exists():
        return None
    return f'Base directory "{base_dir}" does not exist.'


def collect_problems(request: ProvisionRequest) -> list[str]:
    """Run every rule against *request* and return all failure messages."""
    results = [
        check_project_name(request.project_name),
        check_package_manager(request.package_manager),
        check_template_url(request.template_url),
        check_base_dir(request.base_dir),
    ]
    return [message for message in results if message is not None]


def validate_request(request: ProvisionRequest) -> ProvisionRequest:
    """Validate a request draft.

    Returns:
        The same request, safe to hand to the later stages.

    Raises:
        ValidationError: If any rule fails.
    """
    problems = collect_problems(request)
    if problems:
        raise ValidationError(problems)
    return request
