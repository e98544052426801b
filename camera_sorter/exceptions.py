"""
Custom exception hierarchy for the camera sorter.

Fatal conditions (missing source, unsupported host, unusable ffprobe) abort
the whole run. Everything else is handled per file and never escapes the
batch loop.
"""


class CameraSorterError(Exception):
    """Base exception for all camera sorter errors."""
    pass


class SourceDirectoryNotFound(CameraSorterError):
    """Raised when the unsorted directory does not exist."""
    pass


class UnsupportedPlatformError(CameraSorterError):
    """Raised when the host OS has no bundled metadata tooling."""
    pass


class MetadataToolError(CameraSorterError):
    """Raised when the external metadata tool cannot be executed at all."""
    pass


class FileOperationError(CameraSorterError):
    """Raised when a single file cannot be moved."""
    pass
