"""Run configuration, built once by the CLI and passed to each flow."""

from __future__ import annotations

import os
from dataclasses import dataclass

from forkaudit.exceptions import SettingsError

DEFAULT_GITHUB_API = "https://api.github.com"
DEFAULT_MAX_COMMITS = 1000


def _env_float(key: str, default: str) -> float:
    raw = os.environ.get(key, default)
    try:
        return float(raw)
    except ValueError as exc:
        raise SettingsError(key, raw, "expected a number") from exc


def _env_int(key: str, default: str) -> int:
    raw = os.environ.get(key, default)
    try:
        return int(raw)
    except ValueError as exc:
        raise SettingsError(key, raw, "expected an integer") from exc


def get_github_token() -> str | None:
    """Read a GitHub token from the environment."""
    return os.environ.get("GITHUB_TOKEN") or os.environ.get("GH_TOKEN")


@dataclass
class RunConfig:
    """Settings shared by the ``deps`` and ``commits`` flows."""

    github_api: str = DEFAULT_GITHUB_API
    github_token: str | None = None
    http_timeout: float = 30.0
    github_retries: int = 1
    git_timeout: float = 60.0
    max_commits: int = DEFAULT_MAX_COMMITS
    keep_going: bool = False

    @classmethod
    def from_env(cls, **overrides: object) -> RunConfig:
        """Build a config from ``FORKAUDIT_*`` variables, then apply *overrides*.

        Overrides whose value is ``None`` are ignored so that unset CLI
        options fall through to the environment.
        """
        config = cls(
            github_api=os.environ.get("FORKAUDIT_GITHUB_API", DEFAULT_GITHUB_API),
            github_token=get_github_token(),
            http_timeout=_env_float("FORKAUDIT_HTTP_TIMEOUT", "30"),
            github_retries=max(_env_int("FORKAUDIT_GITHUB_RETRIES", "1"), 1),
            git_timeout=_env_float("FORKAUDIT_GIT_TIMEOUT", "60"),
        )
        for key, value in overrides.items():
            if value is not None:
                setattr(config, key, value)
        return config
