# src/pgsb_docker/errors.py
from __future__ import annotations


class PgsbDockerError(Exception):
    """Base class for wrapper errors."""


class ArgumentError(PgsbDockerError, ValueError):
    """Missing, conflicting or malformed wrapper arguments."""


class PathOutsideMountError(PgsbDockerError):
    """A resolved input path does not lie under the mounted common directory."""

    def __init__(self, host_path: str, common_dir: str):
        self.host_path = host_path
        self.common_dir = common_dir
        super().__init__(
            f"Warning: {host_path} is outside of {common_dir}! Not accessible in container."
        )


class SubprocessError(PgsbDockerError):
    def __init__(self, returncode: int, runtime: str = "docker"):
        self.returncode = returncode
        self.runtime = runtime
        super().__init__(f"Error: {runtime} run exited with status {returncode}")
