"""Template source parsing.

Turns a template URL into a ``TemplateSource`` that knows which host it lives
on, which ref to fetch, which sub-directory (if any) to keep, and whether it
can be fetched as a tarball or has to go through ``git clone``.

Accepted forms::

    https://github.com/user/repo
    https://github.com/user/repo.git
    https://github.com/user/repo#v1.2.0
    https://github.com/user/repo/packages/web#main
    https://github.com/user/repo/tree/main/packages/web
    https://git.example.com/group/sub/repo.git#dev (git mode, cloned as given)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

DEFAULT_REF = "HEAD"


class FetchMode(str, Enum):
    """How a template is retrieved."""

    TAR = "tar"
    GIT = "git"


TAR_HOSTS: dict[str, str] = {
    "github.com": "https://github.com/{user}/{name}/archive/{ref}.tar.gz",
    "gitlab.com": "https://gitlab.com/{user}/{name}/-/archive/{ref}/{name}-{ref}.tar.gz",
    "bitbucket.org": "https://bitbucket.org/{user}/{name}/get/{ref}.tar.gz",
}

_SOURCE_RE = re.compile(
    r"^(?P<scheme>https?)://(?:www\.)?(?P<host>[^/\s]+)"
    r"/(?P<user>[^/\s#]+)/(?P<name>[^/\s#]+?)(?:\.git)?"
    r"(?P<subdir>/[^#\s]*)?"
    r"(?:#(?P<ref>\S+))?$"
)


@dataclass(frozen=True)
class TemplateSource:
    """A parsed template location."""

    url: str
    mode: FetchMode
    scheme: str = "https"
    host: str = ""
    user: str = ""
    name: str = ""
    ref: str = DEFAULT_REF
    subdir: str = ""

    @classmethod
    def parse(cls, url: str) -> "TemplateSource":
        """Parse *url*. Unrecognised shapes fall back to git mode verbatim.

        Only hosts in ``TAR_HOSTS`` have their path split into user, repo and
        sub-directory. Any other host keeps its path intact so ``git clone``
        sees the repository the operator named.
        """
        url = url.strip()
        match = _SOURCE_RE.match(url)
        if not match:
            return cls(url=url, mode=FetchMode.GIT)

        host = match.group("host").lower()
        ref = match.group("ref") or DEFAULT_REF
        if host not in TAR_HOSTS:
            return cls(
                url=url,
                mode=FetchMode.GIT,
                scheme=match.group("scheme"),
                host=host,
                ref=ref,
            )

        subdir = (match.group("subdir") or "").strip("/")

        if host == "github.com" and subdir.startswith("tree/"):
            parts = subdir.split("/", 2)
            if len(parts) >= 2 and parts[1]:
                ref = parts[1]
                subdir = parts[2] if len(parts) == 3 else ""

        return cls(
            url=url,
            mode=FetchMode.TAR,
            scheme=match.group("scheme"),
            host=host,
            user=match.group("user"),
            name=match.group("name"),
            ref=ref,
            subdir=subdir,
        )

    @property
    def repo_url(self) -> str:
        """Clone URL for git mode."""
        if self.mode is FetchMode.GIT:
            return self.url.split("#", 1)[0]
        return f"{self.scheme}://{self.host}/{self.user}/{self.name}.git"

    @property
    def archive_url(self) -> str:
        """Tarball URL for tar mode.

        Raises:
            ValueError: If the host has no known archive endpoint.
        """
        template = TAR_HOSTS.get(self.host)
        if template is None:
            raise ValueError(f"No archive endpoint known for host '{self.host}'")
        return template.format(user=self.user, name=self.name, ref=self.ref)

    def describe(self) -> str:
        """Short display form, e.g. ``github.com/user/repo/sub#ref``."""
        if self.mode is FetchMode.GIT:
            return self.url
        text = f"{self.host}/{self.user}/{self.name}"
        if self.subdir:
            text += f"/{self.subdir}"
        if self.ref != DEFAULT_REF:
            text += f"#{self.ref}"
        return text
