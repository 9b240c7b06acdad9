"""Utility modules for drupal-check."""

from .path_utils import ProjectLocator, composer_file_name, resolve_path

__all__ = [
    "ProjectLocator",
    "composer_file_name",
    "resolve_path",
]
