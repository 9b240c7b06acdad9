#!/usr/bin/env python3
"""
Analysis engine boundary.

The orchestrator only talks to ``AnalysisEngine``: ``begin`` prepares a run
(the inception) and ``analyse`` performs it. ``PhpstanEngine`` drives the
PHPStan binary installed in the project's vendor directory.
"""

import logging
import shutil
import subprocess
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, TextIO

from .errors import InceptionNotSuccessful, ShouldNotHappen
from .formatters import FormatterHandle, FormatterRegistry, default_registry

logger = logging.getLogger(__name__)


@dataclass
class ConsoleStyle:
    """Streams the engine writes its report to."""
    output: TextIO = field(default_factory=lambda: sys.stdout)
    error_output: TextIO = field(default_factory=lambda: sys.stderr)
    decorated: bool = False

    @classmethod
    def for_terminal(cls, output: Optional[TextIO] = None, error_output: Optional[TextIO] = None) -> "ConsoleStyle":
        output = output or sys.stdout
        error_output = error_output or sys.stderr
        isatty = getattr(output, "isatty", None)
        return cls(output=output, error_output=error_output, decorated=bool(isatty and isatty()))


@dataclass(frozen=True)
class EngineInvocation:
    """Everything the engine needs to set up a run."""
    paths: List[str]
    configuration: Path
    bootstrap_file: Path
    dependency_root: Optional[Path] = None
    debug: bool = False


@dataclass
class Inception:
    """A prepared analysis run."""
    files: List[str]
    formatters: FormatterRegistry
    console_style: ConsoleStyle
    only_files: bool = False
    default_level_used: bool = False

    @property
    def error_output(self) -> TextIO:
        return self.console_style.error_output

    def handle_return(self, exit_code: int) -> int:
        return exit_code


class AnalysisEngine(ABC):
    """Capability interface for the external analysis engine."""

    @abstractmethod
    def begin(self, invocation: EngineInvocation) -> Inception:
        """Prepare a run.

        Raises InceptionNotSuccessful or ShouldNotHappen.
        """

    @abstractmethod
    def analyse(
        self,
        files: List[str],
        only_files: bool,
        console_style: ConsoleStyle,
        formatter: FormatterHandle,
        default_level_used: bool,
        debug: bool,
    ) -> int:
        """Run the analysis and return the engine's exit code."""


class PhpstanEngine(AnalysisEngine):
    """Runs `phpstan analyse` in a subprocess."""

    BINARY = "phpstan"

    def __init__(self, console_style: Optional[ConsoleStyle] = None):
        self.console_style = console_style or ConsoleStyle.for_terminal()
        self._invocation: Optional[EngineInvocation] = None
        self._binary: Optional[str] = None

    def begin(self, invocation: EngineInvocation) -> Inception:
        if not invocation.configuration.is_file():
            raise InceptionNotSuccessful(f"Configuration file {invocation.configuration} not found")
        if not invocation.bootstrap_file.is_file():
            raise InceptionNotSuccessful(f"Autoload file {invocation.bootstrap_file} not found")

        files = [p for p in invocation.paths if Path(p).exists()]
        if not files:
            raise InceptionNotSuccessful("No files found to analyse")

        binary = self.find_binary(invocation.dependency_root)
        if binary is None:
            raise InceptionNotSuccessful(
                f"Unable to find the {self.BINARY} binary; install phpstan/phpstan with Composer"
            )

        self._invocation = invocation
        self._binary = binary
        logger.debug(f"Using {self.BINARY} binary: {binary}")

        return Inception(
            files=files,
            formatters=default_registry(),
            console_style=self.console_style,
            only_files=all(Path(p).is_file() for p in files),
            # Every bundle pins its own level.
            default_level_used=False,
        )

    def analyse(
        self,
        files: List[str],
        only_files: bool,
        console_style: ConsoleStyle,
        formatter: FormatterHandle,
        default_level_used: bool,
        debug: bool,
    ) -> int:
        if self._invocation is None or self._binary is None:
            raise ShouldNotHappen("analyse() called before begin()")

        command = self.build_command(files, formatter, debug, console_style.decorated)
        logger.debug(f"Running: {' '.join(command)}")

        completed = subprocess.run(command, capture_output=True, text=True, check=False)
        console_style.output.write(completed.stdout)
        console_style.error_output.write(completed.stderr)
        return completed.returncode

    def build_command(
        self,
        files: List[str],
        formatter: FormatterHandle,
        debug: bool = False,
        decorated: bool = False,
    ) -> List[str]:
        """Build the phpstan command line for a prepared run."""
        invocation = self._invocation
        command = [
            self._binary,
            "analyse",
            "--configuration",
            str(invocation.configuration),
            "--autoload-file",
            str(invocation.bootstrap_file),
            "--error-format",
            formatter.name,
            "--ansi" if decorated else "--no-ansi",
            "--no-progress",
        ]
        if debug:
            command.append("--debug")
        command.extend(files)
        return command

    @classmethod
    def find_binary(cls, dependency_root: Optional[Path]) -> Optional[str]:
        """Prefer the project's vendor/bin copy, fall back to PATH."""
        if dependency_root is not None:
            candidate = dependency_root / "bin" / cls.BINARY
            if candidate.is_file():
                return str(candidate)
        return shutil.which(cls.BINARY)
