from __future__ import annotations

"""
Domain Exceptions.

Fatal conditions raised by the comparison run. Accumulated comparison
errors are never raised as they occur; they are tallied and surfaced once
through ComparisonFailedError.
"""


class HeaderCompareError(Exception):
    """Base class for all errors raised by headercompare."""


class ConfigError(HeaderCompareError):
    """Raised when an explicitly requested config file cannot be used."""


class DiscoveryError(HeaderCompareError):
    """Raised when an input directory cannot be listed."""


class ToolFailedError(HeaderCompareError):
    """
    Raised when a collaborator tool exits with a nonzero code.

    Attributes:
        tool: Display name of the failing tool.
        returncode: Exit code reported by the tool.
    """

    def __init__(self, tool: str, returncode: int):
        self.tool = tool
        self.returncode = returncode
        super().__init__(f"{tool} failed; rc={returncode}")


class ComparisonFailedError(HeaderCompareError):
    """Raised at the end of a run when any comparison error was recorded."""

    def __init__(self, errors: int):
        self.errors = errors
        super().__init__(f"{errors} errors occurred")
