"""Script persistence and R interpreter execution.

The plot documents only need two operations from the outside world:
write the generated script, and run ``<interpreter> -f <script>``.
Both live behind the :class:`Renderer` protocol so tests can inject a
fake and never spawn a process.

A nonzero interpreter exit status is not an error. It is logged, kept on
the returned :class:`Execution`, and reported as a warning by the chart
service.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Execution:
    """Captured outcome of one interpreter run."""

    output: str
    returncode: int = 0
    errors: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class Renderer(Protocol):
    """Collaborator that persists a script and runs it."""

    def persist(self, text: str, path: Path) -> None:
        """Write *text* to *path*, replacing any existing content."""
        ...

    def execute(self, interpreter_path: str, script_path: Path) -> Execution:
        """Run *script_path* through the interpreter and capture the run."""
        ...


class RScriptRenderer:
    """Renderer backed by the local filesystem and an R executable."""

    def persist(self, text: str, path: Path) -> None:
        """Write the script, one trailing newline, creating parent directories."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as handle:
            handle.write(text)
            handle.write("\n")
        logger.debug("Persisted script to %s (%d bytes)", path, len(text) + 1)

    def execute(self, interpreter_path: str, script_path: Path) -> Execution:
        """Invoke ``<interpreter_path> -f <script_path>`` and wait for it.

        Raises:
            OSError: the interpreter executable could not be launched.
        """
        argv = [interpreter_path, "-f", str(script_path)]
        logger.debug("Running %s", " ".join(argv))
        completed = subprocess.run(argv, capture_output=True, text=True, check=False)
        if completed.returncode != 0:
            logger.warning(
                "Interpreter %s exited with status %d", interpreter_path, completed.returncode
            )
        return Execution(
            output=completed.stdout,
            returncode=completed.returncode,
            errors=completed.stderr or "",
        )
