from __future__ import annotations

"""
Collaborator Tool Adapters.

The compiler and the header generator are opaque external tools. The engine
only depends on the two protocols below; the shipped implementations run a
command line through subprocess and report the tool's exit code.
"""

import logging
import subprocess
import sys
from typing import List, Optional, Protocol, Sequence, TextIO

logger = logging.getLogger(__name__)

# Conventional shell code for "command not found".
COMMAND_NOT_RUNNABLE = 127


# -----------------------------------------------------------------------------
# PROTOCOLS
# -----------------------------------------------------------------------------

class Compiler(Protocol):
    """Compiles sources into artifacts and emits the candidate header set."""

    name: str

    def compile(self, args: List[str]) -> int:
        ...


class HeaderGenerator(Protocol):
    """Generates the golden header set from compiled artifact binary names."""

    name: str

    def run(self, args: List[str], output_sink: TextIO) -> int:
        ...


# -----------------------------------------------------------------------------
# SUBPROCESS IMPLEMENTATIONS
# -----------------------------------------------------------------------------

class CommandTool:
    """
    Base adapter running `command + args` as a child process.

    Args:
        command: Executable and leading arguments, e.g. ['javac'].
        name: Display name used in logs and error messages.
        cwd: Optional working directory for the child process.
    """

    def __init__(self, command: Sequence[str], name: Optional[str] = None, cwd: Optional[str] = None):
        if not command:
            raise ValueError("command must not be empty")
        self.command = list(command)
        self.name = name or self.command[0]
        self.cwd = cwd

    def _execute(self, args: List[str], output_sink: Optional[TextIO]) -> int:
        cmd = self.command + list(args)
        logger.debug(f"Running {self.name}: {cmd}")
        try:
            proc = subprocess.run(
                cmd,
                cwd=self.cwd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            logger.error(f"Cannot start {self.name} ({cmd[0]}): {e}")
            return COMMAND_NOT_RUNNABLE

        if output_sink is not None:
            if proc.stdout:
                output_sink.write(proc.stdout)
            if proc.stderr:
                output_sink.write(proc.stderr)
            output_sink.flush()

        logger.debug(f"{self.name} exited with rc={proc.returncode}")
        return proc.returncode


class CommandCompiler(CommandTool):
    """Compiler backed by an external command; tool output goes to stderr."""

    def compile(self, args: List[str]) -> int:
        return self._execute(args, sys.stderr)


class CommandHeaderGenerator(CommandTool):
    """Header generator backed by an external command."""

    def run(self, args: List[str], output_sink: TextIO) -> int:
        return self._execute(args, output_sink)


# -----------------------------------------------------------------------------
# ARGUMENT BUILDERS
# -----------------------------------------------------------------------------

def compiler_args(
        classes_dir: str,
        headers_dir: str,
        sources: Sequence[str],
        extra_args: Sequence[str] = (),
) -> List[str]:
    """Arguments for the compiler: '-d <classes> -h <headers> [extra] <sources>'."""
    return ["-d", classes_dir, "-h", headers_dir, *extra_args, *sources]


def generator_args(headers_dir: str, binary_names: Sequence[str]) -> List[str]:
    """Arguments for the header generator: '-d <headers> <binary names>'."""
    return ["-d", headers_dir, *binary_names]
