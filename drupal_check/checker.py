#!/usr/bin/env python3
"""
Check orchestration.

Resolves the project, picks the configuration bundle for the requested
check categories, hands the run to the analysis engine and turns the
engine's answer into an exit code.
"""

import logging
import os
from typing import Optional

from .engine import AnalysisEngine, ConsoleStyle, EngineInvocation, PhpstanEngine
from .errors import AnalysisFailure, CheckError, ConfigurationError, FormatterError
from .formatters import canonical_format_name
from .models import (
    CheckCategory,
    ConfigurationBundle,
    ExitCode,
    InvocationRequest,
    ProjectContext,
    ResolvedChecks,
)
from .utils.path_utils import ProjectLocator

logger = logging.getLogger(__name__)


def resolve_checks(deprecations: bool, analysis: bool, style: bool) -> ResolvedChecks:
    """Apply the deprecations default to the raw category flags."""
    nothing_requested = not (deprecations or analysis or style)
    return ResolvedChecks(
        deprecations=deprecations or nothing_requested,
        analysis=analysis,
        style=style,
    )


def resolve_request_checks(request: InvocationRequest) -> ResolvedChecks:
    return resolve_checks(
        CheckCategory.DEPRECATIONS in request.categories,
        CheckCategory.ANALYSIS in request.categories,
        CheckCategory.STYLE in request.categories,
    )


def select_configuration(checks: ResolvedChecks) -> Optional[ConfigurationBundle]:
    """Pick the bundle for the resolved checks; None if unsupported."""
    if checks.deprecations and checks.analysis:
        return ConfigurationBundle.ANALYSIS_AND_DEPRECATIONS
    if checks.deprecations:
        return ConfigurationBundle.DEPRECATIONS
    if checks.analysis:
        return ConfigurationBundle.ANALYSIS
    # TODO: style checks need a coding-standards runner alongside the engine.
    return None


class CheckCommand:
    """Runs one `check` invocation from start to exit code."""

    def __init__(
        self,
        engine: Optional[AnalysisEngine] = None,
        locator: Optional[ProjectLocator] = None,
        console_style: Optional[ConsoleStyle] = None,
    ):
        self.console_style = console_style or ConsoleStyle.for_terminal()
        self.engine = engine or PhpstanEngine(self.console_style)
        self.locator = locator or ProjectLocator()

    def run(self, request: InvocationRequest) -> int:
        """Run the checks; CheckErrors become a message and exit code 1."""
        try:
            return self._run(request)
        except CheckError as e:
            self._write_error(str(e))
            return ExitCode.FAILURE

    def _run(self, request: InvocationRequest) -> int:
        checks = resolve_request_checks(request)
        for category in checks.enabled():
            logger.debug(f"Performing {category.value} checks")

        context = self.locator.require_project(request.path)
        self._log_context(context)

        configuration = select_configuration(checks)
        if configuration is None:
            raise ConfigurationError("Not supported, yet")
        logger.debug(f"Using configuration: {configuration.path}")

        inception = self.engine.begin(EngineInvocation(
            paths=[request.path],
            configuration=configuration.path,
            bootstrap_file=context.bootstrap_file,
            dependency_root=context.dependency_root,
            debug=request.is_debug,
        ))

        format_name = canonical_format_name(request.output_format)
        formatter = inception.formatters.get(format_name)
        if formatter is None:
            error = FormatterError(request.output_format, inception.formatters.names())
            inception.error_output.write(f"{error}\n")
            return ExitCode.FAILURE

        exit_code = inception.handle_return(self.engine.analyse(
            inception.files,
            inception.only_files,
            inception.console_style,
            formatter,
            inception.default_level_used,
            request.is_debug,
        ))
        if exit_code != ExitCode.SUCCESS:
            logger.info(AnalysisFailure.MESSAGE.format(exit_code=exit_code))
        return exit_code

    def _log_context(self, context: ProjectContext) -> None:
        logger.debug(f"Current working directory: {os.getcwd()}")
        logger.debug(f"Using Drupal root: {context.project_root}")
        logger.debug(f"Using vendor root: {context.dependency_root}")
        logger.debug(f"Using autoloader: {context.bootstrap_file}")

    def _write_error(self, message: str) -> None:
        self.console_style.error_output.write(f"{message}\n")
