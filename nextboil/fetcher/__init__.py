"""next-boil fetcher module.

Retrieves remote template repositories into a local directory, without
version-control history and without any local cache.

Key classes:
    TemplateSource   - Parsed template URL (host, ref, sub-directory, mode)
    TarballCloner    - Downloads host archives over HTTP
    GitCloner        - Shallow git clone for other hosts
    TemplateFetcher  - Bounded-retry wrapper that raises FetchError
"""

from .base import CloneError, Cloner
from .fetcher import FetchError, TemplateFetcher
from .git import GitCloner
from .source import FetchMode, TemplateSource
from .tarball import TarballCloner

__all__ = [
    # Sources
    "TemplateSource",
    "FetchMode",
    # Cloners
    "Cloner",
    "CloneError",
    "TarballCloner",
    "GitCloner",
    # Retry wrapper
    "TemplateFetcher",
    "FetchError",
]
