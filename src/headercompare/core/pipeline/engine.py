from __future__ import annotations

"""
Comparison Run Engine.

Linear orchestration of one regression run: prepare the working layout,
compile the sources, generate headers from the compiled artifacts, compare
both header trees, then cross-check the counts. Collaborator failures abort
the run immediately; comparison problems are accumulated and reported once.
"""

import logging
import sys
from dataclasses import replace
from typing import List, Optional, TextIO

from headercompare.core.comparison.tree_comparator import TreeComparator
from headercompare.core.services.scanner import (
    binary_names_for,
    find_compiled_artifacts,
    find_source_files,
)
from headercompare.core.tools.collaborators import (
    Compiler,
    HeaderGenerator,
    compiler_args,
    generator_args,
)
from headercompare.domain.comparison_models import RunReport
from headercompare.domain.config import RunConfig
from headercompare.domain.errors import ComparisonFailedError, ToolFailedError
from headercompare.infra.fs import count_entries, ensure_directories

logger = logging.getLogger(__name__)

INCONSISTENT_COUNTS = "inconsistent counts"


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def run_comparison(
        config: RunConfig,
        compiler: Compiler,
        generator: HeaderGenerator,
        stream: Optional[TextIO] = None,
) -> RunReport:
    """
    Execute a full compile, generate and compare run.

    Args:
        config: Validated run configuration.
        compiler: Produces artifacts and the candidate header set.
        generator: Produces the golden header set.
        stream: Diagnostic and summary output. Defaults to stdout.

    Returns:
        RunReport: Counts and accumulated errors of the run.

    Raises:
        ToolFailedError: If either collaborator exits with a nonzero code.
        DiscoveryError: If the source directory cannot be listed.
        OSError: If the working directories cannot be created.
    """
    out = stream if stream is not None else sys.stdout

    # 1. Working layout
    ensure_directories([
        config.classes_dir,
        config.compiler_headers_dir,
        config.generator_headers_dir,
    ])

    # 2. Compile
    sources = find_source_files(config.source_dir, config.source_pattern)
    rc = compiler.compile(compiler_args(
        config.classes_dir,
        config.compiler_headers_dir,
        sources,
        config.compiler_extra_args,
    ))
    if rc != 0:
        raise ToolFailedError(compiler.name, rc)

    # 3. Generate
    artifacts = find_compiled_artifacts(config.classes_dir, config.artifact_suffix)
    names = binary_names_for(artifacts, config.artifact_suffix)
    logger.info(f"Generating headers for {len(names)} compiled artifacts")
    rc = generator.run(generator_args(config.generator_headers_dir, names), out)
    if rc != 0:
        raise ToolFailedError(generator.name, rc)

    # 4. Compare (generator output is the golden tree)
    comparator = TreeComparator(out, verbose=config.verbose_diagnostics)
    result = comparator.compare(config.generator_headers_dir, config.compiler_headers_dir)

    # 5. Cross-check counts
    generator_count = count_entries(config.generator_headers_dir)
    compiler_count = count_entries(config.compiler_headers_dir)

    for line in summary_lines(len(sources), compiler_count, generator_count, result.files_compared):
        print(line, file=out)

    report = RunReport(
        source_file_count=len(sources),
        compiler_header_count=compiler_count,
        generator_header_count=generator_count,
        files_compared=result.files_compared,
        errors=result.errors,
        messages=list(result.messages),
        classes_dir=config.classes_dir,
        compiler_headers_dir=config.compiler_headers_dir,
        generator_headers_dir=config.generator_headers_dir,
    )

    if not report.counts_consistent:
        print(INCONSISTENT_COUNTS, file=out)
        logger.error(INCONSISTENT_COUNTS)
        result.record_error(INCONSISTENT_COUNTS)
        report = replace(report, errors=result.errors, messages=list(result.messages))

    return report


def check_report(report: RunReport) -> RunReport:
    """
    Raise if the run accumulated any error.

    Raises:
        ComparisonFailedError: When report.errors is nonzero.
    """
    if report.errors > 0:
        raise ComparisonFailedError(report.errors)
    return report


def summary_lines(
        source_count: int,
        compiler_count: int,
        generator_count: int,
        compared: int,
) -> List[str]:
    return [
        f"{source_count} source files found",
        f"{compiler_count} headers generated by compiler",
        f"{generator_count} headers generated by generator",
        f"{compared} header files compared",
    ]
