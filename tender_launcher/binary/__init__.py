"""
Binary resolution and process supervision.
"""

from .resolver import (
    BinaryResolver,
    Resolution,
    build_asset_name,
    build_download_url,
    candidate_paths,
    resolve_binary_path,
)
from .supervisor import (
    ExitCode,
    FailedToStart,
    ProcessOutcome,
    TerminatedBySignal,
    run_binary,
)

__all__ = [
    "BinaryResolver",
    "Resolution",
    "build_asset_name",
    "build_download_url",
    "candidate_paths",
    "resolve_binary_path",
    "ProcessOutcome",
    "ExitCode",
    "TerminatedBySignal",
    "FailedToStart",
    "run_binary",
]
