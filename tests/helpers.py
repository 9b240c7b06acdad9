"""Shared helpers for drupal-check tests."""

import json
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from drupal_check.engine import AnalysisEngine, ConsoleStyle, Inception
from drupal_check.errors import InceptionNotSuccessful
from drupal_check.formatters import default_registry


@contextmanager
def create_test_project(files: Dict[str, str]) -> Iterator[Path]:
    """Create a temporary directory tree from a path -> content mapping."""
    with tempfile.TemporaryDirectory() as tmp:
        root = Path(tmp).resolve()
        for relative, content in files.items():
            file_path = root / relative
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(content)
        yield root


def composer_project_files(
    web_root: str = "web",
    vendor_dir: Optional[str] = None,
    with_autoload: bool = True,
) -> Dict[str, str]:
    """Files for a composer-managed Drupal site with core under `web_root`."""
    composer = {
        "name": "acme/site",
        "extra": {
            "installer-paths": {
                f"{web_root}/core": ["type:drupal-core"],
                f"{web_root}/modules/contrib/{{$name}}": ["type:drupal-module"],
            }
        },
    }
    if vendor_dir:
        composer["config"] = {"vendor-dir": vendor_dir}

    files = {
        "composer.json": json.dumps(composer),
        f"{web_root}/index.php": "<?php\n",
        f"{web_root}/modules/custom/acme/acme.module": "<?php\n",
    }
    if with_autoload:
        files[f"{vendor_dir or 'vendor'}/autoload.php"] = "<?php\n"
    return files


def tarball_project_files() -> Dict[str, str]:
    """Files for a Drupal site unpacked from a release tarball."""
    return {
        "composer.json": json.dumps({"name": "drupal/legacy-project"}),
        "autoload.php": "<?php\n",
        "core/includes/common.inc": "<?php\n",
        "core/core.services.yml": "services: {}\n",
        "core/misc/drupal.js": "",
        "vendor/autoload.php": "<?php\n",
        "modules/custom/acme/acme.module": "<?php\n",
    }


class FakeEngine(AnalysisEngine):
    """Records calls instead of running an analysis."""

    def __init__(self, exit_code: int = 0, error: Optional[Exception] = None, formatters=None):
        self.exit_code = exit_code
        self.error = error
        self.formatters = formatters if formatters is not None else default_registry()
        self.invocations: List = []
        self.analyse_calls: List[Dict] = []

    @property
    def begun(self) -> bool:
        return bool(self.invocations)

    @property
    def analysed(self) -> bool:
        return bool(self.analyse_calls)

    def begin(self, invocation):
        self.invocations.append(invocation)
        if self.error is not None:
            raise self.error
        return Inception(
            files=list(invocation.paths),
            formatters=self.formatters,
            console_style=ConsoleStyle(),
            default_level_used=False,
        )

    def analyse(self, files, only_files, console_style, formatter, default_level_used, debug):
        self.analyse_calls.append({
            "files": files,
            "only_files": only_files,
            "console_style": console_style,
            "formatter": formatter,
            "default_level_used": default_level_used,
            "debug": debug,
        })
        return self.exit_code


class FailingEngine(FakeEngine):
    """Engine whose set-up always fails."""

    def __init__(self, message: str = "Configuration is invalid"):
        super().__init__(error=InceptionNotSuccessful(message))
