"""Domain errors and failure typing."""

from __future__ import annotations

from pathlib import Path


class PipelineError(Exception):
    """Base class for pipeline failures."""

    error_code = "PIPELINE_ERROR"


class ConfigError(PipelineError):
    """Raised for invalid or missing configuration."""

    error_code = "CONFIG_ERROR"


class IoFailure(PipelineError):
    """Raised when a filesystem operation (stat, read, write, mkdir) fails."""

    error_code = "IO_FAILURE"

    def __init__(self, path: Path, operation: str, cause: OSError) -> None:
        super().__init__(f"IO error during {operation} of {path}: {cause}")
        self.path = path
        self.operation = operation
        self.cause = cause


class Malformed(PipelineError):
    """Raised when catalog content does not match the expected schema."""

    error_code = "MALFORMED"

    def __init__(self, source: str, detail: str) -> None:
        super().__init__(f"JSON parsing error in {source}: {detail}")
        self.source = source
        self.detail = detail


class FileTooLarge(PipelineError):
    """Raised when an input file exceeds the configured size ceiling."""

    error_code = "FILE_TOO_LARGE"

    def __init__(self, path: Path, size: int, max_size: int) -> None:
        super().__init__(f"File too large: {size} bytes (max: {max_size})")
        self.path = path
        self.size = size
        self.max_size = max_size
