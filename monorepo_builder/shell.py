"""Shell utilities.

Provides a wrapper around subprocess for running generated package
pipelines, plus output formatting helpers.
"""

from __future__ import annotations

import subprocess
import sys


class PipelineExecutionError(RuntimeError):
    """A package pipeline exited with a non-zero status.

    Attributes:
        name: Package the pipeline belongs to.
        command: The pipeline that failed.
        returncode: Exit status of the shell.
    """

    def __init__(self, name: str, command: str, returncode: int) -> None:
        self.name = name
        self.command = command
        self.returncode = returncode
        super().__init__(f"Command for {name} failed with exit code {returncode}")


def run_pipeline(name: str, command: str, check: bool = True) -> int:
    """Run a generated pipeline through the shell.

    Output is not captured - it streams directly to the terminal so users
    can follow npm's progress.

    Args:
        name: Package name, used in the error on failure.
        command: Pipeline string (steps joined with ``&&``).
        check: If True (default), raise on non-zero exit.

    Returns:
        The shell's exit status.

    Raises:
        PipelineExecutionError: If check is True and the pipeline fails.
    """
    result = subprocess.run(command, shell=True, check=False)
    if check and result.returncode != 0:
        raise PipelineExecutionError(name, command, result.returncode)
    return result.returncode


def step(msg: str) -> None:
    """Print a visually distinct step header.

    Used to separate major phases of a run in terminal output.
    """
    print(f"\n{'─' * 60}\n{msg}\n{'─' * 60}")


def info(msg: str) -> None:
    """Print an indented detail line under the current step."""
    print(f"  {msg}")


def warn(msg: str) -> None:
    """Print a non-fatal problem to stderr."""
    print(f"WARNING: {msg}", file=sys.stderr)
