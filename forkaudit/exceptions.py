"""Custom exceptions for forkaudit."""

from __future__ import annotations


class ForkAuditError(Exception):
    """Base exception for all forkaudit errors."""


class FilesystemError(ForkAuditError):
    """Raised when a directory or file cannot be read."""


class ManifestParseError(ForkAuditError):
    """Raised when a Cargo.toml file is not valid TOML or its dependency table is malformed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"failed decoding file {path}: {reason}")


class ConfigParseError(ForkAuditError):
    """Raised when the git remote configuration is missing or malformed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"{path}: {reason}")


class VcsCommandError(ForkAuditError):
    """Raised when a git invocation fails or exits non-zero."""

    def __init__(self, cmd: list[str], returncode: int | None, stderr: str):
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(
            f"git command failed (exit {returncode}): {' '.join(cmd)}: {stderr}"
        )


class BoundaryNotFoundError(ForkAuditError):
    """Raised when the upstream tip never shows up in the tracked branch log."""

    def __init__(self, boundary: str, ref: str, scanned: int):
        self.boundary = boundary
        self.ref = ref
        self.scanned = scanned
        super().__init__(
            f"upstream commit {boundary} not found in the last {scanned} commits of {ref}"
        )


class UpstreamQueryError(ForkAuditError):
    """Raised when the hosting API cannot answer for a locked source."""

    def __init__(self, source: str, reason: str):
        self.source = source
        super().__init__(f"failed querying upstream for {source}: {reason}")


class SettingsError(ForkAuditError):
    """Raised when a ``FORKAUDIT_*`` environment variable has an unusable value."""

    def __init__(self, name: str, value: str, reason: str):
        self.name = name
        self.value = value
        super().__init__(f"invalid {name}={value!r}: {reason}")
