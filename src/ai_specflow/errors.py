"""Exception types raised by the scaffolding engine and its command surface.

Filesystem failures have no class here: they surface as the plain
``OSError`` raised by the failing call and propagate to the top level.
"""


class SpecflowError(Exception):
    """Base class for all ai-specflow errors."""


class UsageError(SpecflowError):
    """Unsupported command, unknown flag, missing flag value or bad provider.

    Attributes:
        usage: Help text of the command that rejected the input, if any.
    """

    def __init__(self, message: str, usage: str | None = None) -> None:
        super().__init__(message)
        self.usage = usage


class MissingSourceError(SpecflowError):
    """A mandatory bundled template directory is absent."""


class EncodingError(SpecflowError):
    """Text cannot be decoded from, or encoded to, a file's encoding."""


class TraversalError(SpecflowError):
    """A directory tree cannot be enumerated safely (e.g. a symlink cycle)."""
