#!/usr/bin/env python3
"""
Project root discovery for drupal-check.

Walks up from the target path looking for a Drupal installation, either a
tarball layout (core/ next to autoload.php) or a Composer project whose
installer-paths place drupal/core somewhere below it.
"""

import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional

from ..errors import BootstrapMissing, PathNotFound, ProjectResolutionError, ProjectRootNotFound
from ..models import ProjectContext

logger = logging.getLogger(__name__)

CORE_PACKAGES = ("type:drupal-core", "drupal/core", "drupal/drupal")
DRUPAL_JS_CANDIDATES = ("core/misc/drupal.js", "core/assets/js/drupal.js")


def composer_file_name() -> str:
    """Name of the composer file, honouring the COMPOSER environment variable."""
    return os.environ.get("COMPOSER") or "composer.json"


def resolve_path(path: str) -> Path:
    """Resolve a user-supplied path to an absolute, symlink-free path."""
    resolved = Path(path).expanduser().resolve()
    if not resolved.exists():
        raise PathNotFound(path)
    return resolved


class ProjectLocator:
    """Finds the Drupal root and vendor directory for a path."""

    def __init__(self, composer_file: Optional[str] = None):
        self.composer_file = composer_file or composer_file_name()

    def locate(self, path: str) -> ProjectContext:
        """Locate the project containing `path`.

        Returns a context with empty roots when no project qualifies.
        """
        target = resolve_path(path)
        start = target if target.is_dir() else target.parent

        for candidate in (start, *start.parents):
            context = self._check_root(target, candidate)
            if context is not None:
                logger.debug(f"Found project root {context.project_root} from {candidate}")
                return context

        logger.debug(f"No project root found above {start}")
        return ProjectContext(target_path=target)

    def require_project(self, path: str) -> ProjectContext:
        """Locate the project and insist on a loadable bootstrap file."""
        context = self.locate(path)
        if not context.is_resolved:
            raise ProjectRootNotFound(path)
        if not context.bootstrap_file.is_file():
            raise BootstrapMissing(str(context.bootstrap_file))
        return context

    def _check_root(self, target: Path, directory: Path) -> Optional[ProjectContext]:
        """Return a context if `directory` is a project root candidate."""
        composer_path = directory / self.composer_file
        if not composer_path.is_file():
            return None

        project_root = None
        if self._is_tarball_root(directory):
            project_root = directory

        composer = self._load_composer(composer_path)
        install_root = self._core_install_root(directory, composer)
        if install_root is not None:
            project_root = install_root

        if project_root is None:
            return None

        return ProjectContext(
            target_path=target,
            project_root=project_root,
            dependency_root=self._vendor_dir(directory, composer),
            composer_root=directory,
        )

    def _is_tarball_root(self, directory: Path) -> bool:
        """Check for a Drupal unpacked from a release tarball."""
        if not (directory / "autoload.php").exists():
            return False
        # core/includes/common.inc alone would also match Drupal 7 sites
        # that happen to have a "core" folder.
        if not (directory / "core/includes/common.inc").exists():
            return False
        if not (directory / "core/core.services.yml").exists():
            return False
        return any((directory / js).exists() for js in DRUPAL_JS_CANDIDATES)

    def _load_composer(self, composer_path: Path) -> Dict:
        try:
            with open(composer_path, encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ProjectResolutionError(f"Unable to decode {composer_path}") from e
        return data if isinstance(data, dict) else {}

    def _core_install_root(self, directory: Path, composer: Dict) -> Optional[Path]:
        """Find where composer installs drupal/core relative to `directory`."""
        extra = composer.get("extra")
        installer_paths = extra.get("installer-paths") if isinstance(extra, dict) else None
        if not isinstance(installer_paths, dict):
            return None

        install_root = None
        for install_path, packages in installer_paths.items():
            if not isinstance(packages, list):
                continue
            if not any(package in packages for package in CORE_PACKAGES):
                continue
            if install_path == "core" or composer.get("name") == "drupal/drupal":
                candidate = directory
            elif install_path.endswith("/core"):
                candidate = directory / install_path[:-len("/core")]
            else:
                candidate = directory / install_path
            # A root that is not on disk does not count.
            install_root = candidate.resolve() if candidate.is_dir() else None
        return install_root

    def _vendor_dir(self, composer_root: Path, composer: Dict) -> Path:
        config = composer.get("config")
        vendor_dir = config.get("vendor-dir") if isinstance(config, dict) else None
        if vendor_dir:
            return composer_root / vendor_dir
        return composer_root / "vendor"
