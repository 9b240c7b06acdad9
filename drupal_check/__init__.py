"""drupal-check: deprecation and analysis checks for Drupal code."""

from .checker import CheckCommand, resolve_checks, select_configuration
from .models import (
    CheckCategory,
    ConfigurationBundle,
    ExitCode,
    InvocationRequest,
    ProjectContext,
    ResolvedChecks,
    Verbosity,
)
from .utils import ProjectLocator

__version__ = "1.0.0"

__all__ = [
    "CheckCommand",
    "resolve_checks",
    "select_configuration",
    "CheckCategory",
    "ConfigurationBundle",
    "ExitCode",
    "InvocationRequest",
    "ProjectContext",
    "ResolvedChecks",
    "Verbosity",
    "ProjectLocator",
]
