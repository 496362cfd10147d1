"""
Error types raised by the combine pipeline.

Every failure is fatal; combine_subdirs.main() catches CombineError once and
exits with the message on stderr.
"""


class CombineError(Exception):
    """Base class for all fatal combine errors."""


class ConfigError(CombineError):
    """Root directory missing, not a directory, or no subdirectory has the file."""


class ParseError(CombineError, ValueError):
    """A data line has the wrong shape or a non-integer value."""

    def __init__(self, message: str, line: str):
        super().__init__(f"{message}: '{line}'")
        self.line = line


class CombineIOError(CombineError):
    """An input file could not be read or the output could not be written."""
