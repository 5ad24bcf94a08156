"""next-boil -- bootstrap a new project from a remote template.

Fetches a template repository into a fresh project directory, optionally
initialises git, and installs dependencies with npm, yarn or pnpm.

Quick usage::

    from nextboil import Config, ProvisionRequest, Provisioner

    provisioner = Provisioner(Config())
    result = await provisioner.run(ProvisionRequest(project_name="my-app"))
"""

from nextboil.config import Config
from nextboil.models import ProvisionRequest, ProvisionResult
from nextboil.provisioner import Provisioner

__version__ = "0.2.0"

__all__ = [
    "Config",
    "ProvisionRequest",
    "ProvisionResult",
    "Provisioner",
    "__version__",
]
