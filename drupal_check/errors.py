"""Error taxonomy for drupal-check.

Every failure the orchestrator detects is a ``CheckError``; the CLI turns
its message into a single line of output and exit code 1.
"""


class CheckError(Exception):
    """Base class for failures reported to the user."""


class InputError(CheckError):
    """The invocation itself is unusable."""


class PathNotFound(InputError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"{path} does not exist")


class ProjectResolutionError(CheckError):
    """The project or its dependency directory could not be resolved."""


class ProjectRootNotFound(ProjectResolutionError):
    def __init__(self, path: str):
        self.path = path
        super().__init__("Unable to determine the Drupal root")


class BootstrapMissing(ProjectResolutionError):
    def __init__(self, bootstrap_file: str):
        self.bootstrap_file = bootstrap_file
        super().__init__("Could not find autoload file.")


class ConfigurationError(CheckError):
    """The requested combination of check categories is not supported."""


class FormatterError(CheckError):
    """The requested error formatter is not registered."""

    def __init__(self, requested: str, available: list[str]):
        self.requested = requested
        self.available = available
        super().__init__(
            f'Error formatter "{requested}" not found. '
            f"Available error formatters are: {', '.join(available)}"
        )


class EngineError(CheckError):
    """The analysis engine failed before it could analyse anything."""


class InceptionNotSuccessful(EngineError):
    """Engine set-up failed: bad configuration or missing environment."""


class ShouldNotHappen(EngineError):
    """The engine hit an internal invariant violation."""


class AnalysisFailure(CheckError):
    """The analysis ran and reported a failing result."""

    MESSAGE = "Analysis reported failures (exit code {exit_code})"

    def __init__(self, exit_code: int):
        self.exit_code = exit_code
        super().__init__(self.MESSAGE.format(exit_code=exit_code))
