"""Execution of planned external tool commands."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

from .logging import get_logger
from .models import ToolCommand, ToolResult

EXIT_NOT_FOUND = 127
EXIT_TIMEOUT = 124


class ToolRunner:
    """Runs ToolCommands sequentially inside a project root."""

    def __init__(self, timeout: Optional[float] = None) -> None:
        self.timeout = timeout
        self._logger = get_logger("runner")

    def run(self, command: ToolCommand, cwd: Path | str) -> ToolResult:
        self._logger.info("Running %s: %s", command.name, command.display)
        if not command.argv:
            return ToolResult(command=command, exit_code=EXIT_NOT_FOUND, output="Empty command")
        try:
            completed = subprocess.run(
                list(command.argv),
                cwd=str(cwd),
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError:
            self._logger.debug("Executable not found for %s", command.display)
            return ToolResult(
                command=command,
                exit_code=EXIT_NOT_FOUND,
                output=f"Unable to locate '{command.argv[0]}'.",
            )
        except subprocess.TimeoutExpired:
            return ToolResult(
                command=command,
                exit_code=EXIT_TIMEOUT,
                output=f"Timed out after {self.timeout}s.",
            )
        output = (completed.stdout or "") + (completed.stderr or "")
        if completed.returncode != 0:
            self._logger.debug("%s exited with %s", command.name, completed.returncode)
        return ToolResult(command=command, exit_code=completed.returncode, output=output)

    def run_all(
        self,
        commands: Sequence[ToolCommand],
        cwd: Path | str,
        *,
        fail_fast: bool = False,
    ) -> List[ToolResult]:
        """Run ``commands`` in order, stopping after a blocking failure when ``fail_fast``."""
        results: List[ToolResult] = []
        for command in commands:
            result = self.run(command, cwd)
            results.append(result)
            if fail_fast and command.blocking and not result.ok:
                break
        return results


__all__ = ["EXIT_NOT_FOUND", "EXIT_TIMEOUT", "ToolRunner"]
