"""Reading the origin remote from ``.git/config``."""

from __future__ import annotations

import configparser
import os
import re

from forkaudit.exceptions import ConfigParseError

_ORIGIN_SECTION = 'remote "origin"'

# git@github.com:owner/repo.git, ssh://git@github.com/owner/repo,
# https://github.com/owner/repo.git
_GITHUB_REMOTE_RE = re.compile(r"github\.com[:/]([^/]+)/([^/]+?)(?:\.git)?/?$")


def git_config_path(repo_path: str) -> str:
    return os.path.join(repo_path, ".git", "config")


def read_origin_url(repo_path: str) -> str:
    """Return the ``url`` of ``[remote "origin"]`` in *repo_path*'s git config."""
    path = git_config_path(repo_path)
    cfg = configparser.ConfigParser(strict=False, interpolation=None, allow_no_value=True)
    try:
        with open(path, encoding="utf-8") as f:
            cfg.read_file(f)
    except OSError as exc:
        raise ConfigParseError(path, f"cannot read git config: {exc}") from exc
    except configparser.Error as exc:
        raise ConfigParseError(path, f"malformed git config: {exc}") from exc

    url = cfg.get(_ORIGIN_SECTION, "url", fallback=None)
    if not url:
        raise ConfigParseError(path, 'no url for remote "origin"')
    return url


def github_web_url(remote_url: str) -> str | None:
    """Map a GitHub remote URL to ``https://github.com/<owner>/<repo>``."""
    m = _GITHUB_REMOTE_RE.search(remote_url.strip())
    if not m:
        return None
    return f"https://github.com/{m.group(1)}/{m.group(2)}"


def origin_web_url(repo_path: str) -> str:
    """Canonical GitHub web URL of the origin remote.

    Raises :class:`ConfigParseError` when origin is missing or not on GitHub.
    """
    url = read_origin_url(repo_path)
    web_url = github_web_url(url)
    if web_url is None:
        raise ConfigParseError(
            git_config_path(repo_path), f"origin url is not a GitHub repository: {url}"
        )
    return web_url
