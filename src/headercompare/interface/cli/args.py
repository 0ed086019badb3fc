from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates the parsed
namespace into configuration overrides.
"""

import argparse
import shlex
from typing import Any, Dict, List

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the headercompare CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="headercompare",
        description=(
            "Compile sources, generate native headers with two independent tools "
            "and check that both header trees are byte-for-byte identical."
        ),
    )

    # --- Path Management ---
    p.add_argument(
        "-s", "--source-dir",
        dest="source_dir",
        default=None,
        help="Directory holding the source files (default: current directory).",
    )
    p.add_argument(
        "-w", "--work-dir",
        dest="work_dir",
        default=None,
        help="Directory receiving classes and both header trees (default: current directory).",
    )
    p.add_argument(
        "--pattern",
        dest="source_pattern",
        default=None,
        help=r"Regular expression selecting source file names (default: TestClass[0-9]+\.java).",
    )

    # --- Collaborator Tools ---
    p.add_argument(
        "--compiler",
        dest="compiler_command",
        type=_command_words,
        default=None,
        help="Compiler command line (default: javac).",
    )
    p.add_argument(
        "--compiler-arg",
        dest="extra_compiler_args",
        action="extend",
        type=_shell_words,
        default=None,
        metavar="FLAGS",
        help=(
            "Compiler flags added after the configured ones (-XDjavah:full by default); "
            "repeatable. Flags start with '-', so pass them as --compiler-arg=-Xlint "
            "or --compiler-arg=\"-Xlint -g\"."
        ),
    )
    p.add_argument(
        "--generator",
        dest="generator_command",
        type=_command_words,
        default=None,
        help="Header generator command line (default: javah).",
    )

    # --- Configuration ---
    p.add_argument(
        "--config",
        dest="config_file",
        default=None,
        help="JSON file with configuration values.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration and exit.",
    )

    # --- Output and Diagnostics ---
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the run report as JSON.",
    )
    p.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Only print errors and the summary, not per-file diagnostics.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write the log to this file.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset. None means "not given".
    """
    overrides: Dict[str, Any] = {}

    overrides["source_dir"] = args.source_dir
    overrides["work_dir"] = args.work_dir
    overrides["source_pattern"] = args.source_pattern

    overrides["compiler_command"] = args.compiler_command
    overrides["generator_command"] = args.generator_command

    # Appended to compiler_extra_args after validation, never replacing it.
    overrides["extra_compiler_args"] = args.extra_compiler_args

    if args.quiet:
        overrides["verbose_diagnostics"] = False

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _shell_words(value: str) -> List[str]:
    """argparse type: split a string with shell quoting rules."""
    try:
        return shlex.split(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"cannot parse {value!r}: {e}") from e


def _command_words(value: str) -> List[str]:
    """argparse type: a non-empty command line."""
    words = _shell_words(value)
    if not words:
        raise argparse.ArgumentTypeError("command must not be empty")
    return words
