"""central-flow -- plugin-based quick-launcher core.

A query fans out to providers, their candidates are ranked into one
addressable list, and a later ``execute(id)`` runs the chosen action.

Public API::

    from central_flow import Launcher, LauncherConfig

    launcher = await Launcher.create(LauncherConfig())
    results = await launcher.search("fire")
    await launcher.execute(results[0].id)
"""

from central_flow.config import LauncherConfig, load_launcher_config
from central_flow.errors import (
    CentralFlowError,
    ProviderContractError,
    ProviderLoadError,
    ResultNotFoundError,
)
from central_flow.launcher import Launcher
from central_flow.models import ResultSummary
from central_flow.providers import Candidate, Provider, ProviderRegistry

__all__ = [
    "Candidate",
    "CentralFlowError",
    "Launcher",
    "LauncherConfig",
    "Provider",
    "ProviderContractError",
    "ProviderLoadError",
    "ProviderRegistry",
    "ResultNotFoundError",
    "ResultSummary",
    "load_launcher_config",
]
__version__ = "0.1.0"
