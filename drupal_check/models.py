#!/usr/bin/env python3
"""
Data models for drupal-check.

Contains the value types passed between the CLI, the project locator and
the check orchestrator.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from pathlib import Path
from typing import FrozenSet, Optional

PHPSTAN_DIR = Path(__file__).parent / "phpstan"

BOOTSTRAP_FILE_NAME = "autoload.php"


class CheckCategory(Enum):
    """Check categories selectable on the command line."""
    DEPRECATIONS = "deprecations"
    ANALYSIS = "analysis"
    STYLE = "style"


class Verbosity(IntEnum):
    """Console verbosity levels, mirroring -q / -v / -vv / -vvv."""
    QUIET = 0
    NORMAL = 1
    VERBOSE = 2
    VERY_VERBOSE = 3
    DEBUG = 4

    @classmethod
    def from_flags(cls, verbose: int = 0, quiet: bool = False) -> "Verbosity":
        """Map a -v count and -q flag to a verbosity level."""
        if quiet:
            return cls.QUIET
        return cls(min(cls.NORMAL + verbose, cls.DEBUG))


class ExitCode(IntEnum):
    """Process exit codes."""
    SUCCESS = 0
    FAILURE = 1


class ConfigurationBundle(Enum):
    """Analysis configuration bundles shipped with the package."""
    DEPRECATIONS = "deprecation_testing.neon"
    ANALYSIS = "rules_testing.neon"
    ANALYSIS_AND_DEPRECATIONS = "rules_and_deprecations_testing.neon"

    @property
    def path(self) -> Path:
        return PHPSTAN_DIR / self.value


@dataclass(frozen=True)
class InvocationRequest:
    """A single `check` invocation as requested on the command line."""
    path: str
    categories: FrozenSet[CheckCategory] = frozenset()
    output_format: str = "table"
    verbosity: Verbosity = Verbosity.NORMAL

    @property
    def is_debug(self) -> bool:
        return self.verbosity >= Verbosity.DEBUG


@dataclass(frozen=True)
class ResolvedChecks:
    """Check categories after the deprecations default has been applied."""
    deprecations: bool
    analysis: bool
    style: bool

    def enabled(self) -> list[CheckCategory]:
        """Return the enabled categories in display order."""
        flags = [
            (CheckCategory.DEPRECATIONS, self.deprecations),
            (CheckCategory.ANALYSIS, self.analysis),
            (CheckCategory.STYLE, self.style),
        ]
        return [category for category, on in flags if on]


@dataclass(frozen=True)
class ProjectContext:
    """Where the checked code lives: target path, project root, vendor dir."""
    target_path: Path
    project_root: Optional[Path] = None
    dependency_root: Optional[Path] = None
    composer_root: Optional[Path] = None

    @property
    def is_resolved(self) -> bool:
        return self.project_root is not None and self.dependency_root is not None

    @property
    def bootstrap_file(self) -> Optional[Path]:
        if self.dependency_root is None:
            return None
        return self.dependency_root / BOOTSTRAP_FILE_NAME
