#!/usr/bin/env python3
"""
Error formatter registry.

Formatters are registered under canonical identifiers. Each handle also
carries the engine-side service id (``errorFormatter.<name>``) so listings
can be produced by stripping the prefix, the way the engine names them.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)

SERVICE_PREFIX = "errorFormatter."

FORMAT_ALIASES = {
    "json": "prettyJson",
}

DEFAULT_FORMATTERS = (
    "raw",
    "table",
    "checkstyle",
    "json",
    "prettyJson",
    "junit",
    "gitlab",
    "github",
    "teamcity",
)


def canonical_format_name(name: str) -> str:
    """Rewrite convenience aliases to the canonical formatter name."""
    return FORMAT_ALIASES.get(name, name)


@dataclass(frozen=True)
class FormatterHandle:
    """A registered error formatter."""
    name: str

    @property
    def service_id(self) -> str:
        return f"{SERVICE_PREFIX}{self.name}"


class FormatterRegistry:
    """Ordered map of canonical formatter name to handle."""

    def __init__(self, names: Iterable[str] = ()):
        self._formatters: Dict[str, FormatterHandle] = {}
        for name in names:
            self.register(name)

    def register(self, name: str) -> FormatterHandle:
        """Register a formatter under its canonical name (idempotent)."""
        if name.startswith(SERVICE_PREFIX):
            name = name[len(SERVICE_PREFIX):]
        handle = self._formatters.get(name)
        if handle is None:
            handle = FormatterHandle(name)
            self._formatters[name] = handle
            logger.debug(f"Registered error formatter: {handle.service_id}")
        return handle

    def get(self, name: str) -> Optional[FormatterHandle]:
        return self._formatters.get(name)

    def has(self, name: str) -> bool:
        return name in self._formatters

    def names(self) -> List[str]:
        """Registered formatter names, prefix stripped, in registration order."""
        return [
            service_id[len(SERVICE_PREFIX):]
            for service_id in self.service_ids()
        ]

    def service_ids(self) -> List[str]:
        return [handle.service_id for handle in self._formatters.values()]

    def __len__(self) -> int:
        return len(self._formatters)


def default_registry() -> FormatterRegistry:
    """Registry of the formatters the PHPStan binary provides."""
    return FormatterRegistry(DEFAULT_FORMATTERS)
