from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration merge
(defaults, JSON file, CLI overrides), the comparison run, and result
rendering with a process exit code.
"""

import json
import os
import sys
from typing import Any, Dict, List, Optional

from headercompare.core.pipeline.engine import check_report, run_comparison
from headercompare.core.pipeline.stages.validator import validate_config
from headercompare.core.tools.collaborators import CommandCompiler, CommandHeaderGenerator
from headercompare.domain.comparison_models import RunReport
from headercompare.domain.config import RunConfig, load_config
from headercompare.domain.errors import (
    ComparisonFailedError,
    ConfigError,
    DiscoveryError,
    ToolFailedError,
)
from headercompare.infra.logging import LoggingConfig, configure_logging, get_logger
from headercompare.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_COMPARISON_FAILED = 1
EXIT_INVALID_INPUT = 2
EXIT_TOOL_FAILED = 3
EXIT_RUN_ABORTED = 4
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap
    log_level = "DEBUG" if args.debug else "INFO"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file))

    # 3. Configuration resolution (a file named on the command line must load)
    try:
        base_conf = load_config(args.config_file, strict=True)
    except ConfigError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    overrides = cli_args.args_to_overrides(args)
    raw_conf = _merge_config(base_conf, overrides)
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")
    _append_compiler_args(clean_conf, overrides.get("extra_compiler_args"))

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    # 4. Pre-flight input verification
    config = RunConfig.from_dict(clean_conf)
    if not os.path.isdir(config.source_dir):
        msg = f"Source directory does not exist: {config.source_dir}"
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    # 5. Run phase
    compiler = CommandCompiler(config.compiler_command, name="compiler")
    generator = CommandHeaderGenerator(config.generator_command, name="generator")

    # In JSON mode the diagnostics go to stderr so stdout stays parseable.
    stream = sys.stderr if args.json_output else sys.stdout

    logger.info(f"Comparing headers for sources in: {config.source_dir}")
    try:
        report = run_comparison(config, compiler, generator, stream)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        return EXIT_INTERRUPTED
    except ToolFailedError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_TOOL_FAILED
    except DiscoveryError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    except OSError as e:
        logger.critical(f"Run aborted: {e}", exc_info=True)
        print(f"ERROR: run aborted: {e}", file=sys.stderr)
        return EXIT_RUN_ABORTED

    # 6. Output rendering phase
    if args.json_output:
        print(json.dumps(report.to_dict(), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(report)

    try:
        check_report(report)
    except ComparisonFailedError as e:
        logger.error(str(e))
        return EXIT_COMPARISON_FAILED
    return EXIT_OK

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow merge of override values into the base configuration.

    Only known keys are merged, and None means the flag was not given.
    """
    out = dict(base)
    keys_to_merge = [
        "source_dir", "work_dir", "source_pattern",
        "compiler_command", "generator_command",
        "verbose_diagnostics",
    ]
    for k in keys_to_merge:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out


def _append_compiler_args(config: Dict[str, Any], extra: Optional[List[str]]) -> None:
    """Add command-line compiler flags after the configured ones."""
    if extra:
        config["compiler_extra_args"] = list(config["compiler_extra_args"]) + list(extra)

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(report: RunReport) -> None:
    """Print the final verdict; the count lines are written by the engine."""
    if report.ok:
        print("PASSED")
        return

    print(f"FAILED: {report.errors} errors occurred")
    for message in report.messages:
        print(f"  - {message}")


if __name__ == "__main__":
    sys.exit(main())
