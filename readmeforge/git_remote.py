"""
git_remote.py

Responsibility: Derive the GitHub repository URL from the local `origin` remote.

Only one git command is ever run (`git remote get-url origin`). Any failure to
read the remote is reported as "not found" (None), never as an exception.
"""

from __future__ import annotations

import logging
import re
import subprocess
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

# Matches git@github.com:owner/repo(.git), ssh://git@github.com/owner/repo and
# https://[user@][www.]github.com/owner/repo(.git)[/...].
_GITHUB_REMOTE_RE = re.compile(
    r"(?:^|[@/])(?:www\.)?github\.com[:/](?P<owner>[^/\s:]+)/(?P<repo>[^/\s]+?)(?:\.git)?(?:/.*)?$"
)


@dataclass(frozen=True)
class RemoteRef:
    owner: str
    repo: str

    @property
    def url(self) -> str:
        return f"https://github.com/{self.owner}/{self.repo}"


def parse_remote(raw: str) -> RemoteRef | None:
    """
    Extract (owner, repo) from a GitHub remote URL; None for anything else.
    """
    m = _GITHUB_REMOTE_RE.search(raw.strip())
    if m is None:
        return None
    return RemoteRef(owner=m.group("owner"), repo=m.group("repo"))


def read_origin_url(cwd: str | Path | None = None) -> str | None:
    cmd = ["git", "remote", "get-url", "origin"]
    try:
        result = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd is not None else None,
            check=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
        )
    except subprocess.CalledProcessError as e:
        logger.debug("%s exited with %s: %s", " ".join(cmd), e.returncode, (e.stderr or "").strip())
        return None
    except OSError as e:
        logger.debug("Could not run git: %s", e)
        return None

    remote = result.stdout.strip()
    return remote or None


def detect_repo_url(cwd: str | Path | None = None) -> str | None:
    """
    Return https://github.com/<owner>/<repo> for the origin remote, or None.
    """
    remote = read_origin_url(cwd)
    if remote is None:
        return None
    ref = parse_remote(remote)
    if ref is None:
        logger.debug("origin remote is not a GitHub URL: %s", remote)
        return None
    logger.debug("Detected repository %s from origin remote", ref.url)
    return ref.url
