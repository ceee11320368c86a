"""
Git repository discovery for source-based deployments.

Every failure is soft: a missing git binary, a directory outside any
repository, or a repository without a GitHub remote all resolve to "no
repository" so the deployment source falls through to the next option.
"""

from __future__ import annotations

import re
import subprocess
from dataclasses import dataclass
from pathlib import Path

import structlog

logger = structlog.get_logger()

DEFAULT_BRANCH = "main"
DEFAULT_TIMEOUT_SECONDS = 5.0

# https://github.com/owner/repo(.git), ssh://git@github.com/owner/repo(.git),
# git@github.com:owner/repo(.git)
_GITHUB_REMOTE = re.compile(
    r"^(?:https?://(?:[^@/]+@)?github\.com/|ssh://git@github\.com/|git@github\.com:)"
    r"(?P<owner>[^/]+)/(?P<repo>[^/]+?)(?:\.git)?/?$"
)


@dataclass(frozen=True)
class GitRepoInfo:
    """Repository context detected from the working tree.

    Attributes:
        repository: GitHub repository in "owner/repo" form, None when the
            remote is missing or not on GitHub
        branch: Current branch name
        repo_root_path: Absolute path of the repository root
    """

    repository: str | None
    branch: str
    repo_root_path: Path


def find_repo_root(start_path: str | Path) -> Path | None:
    """Walk upward from start_path looking for a .git marker."""
    current = Path(start_path).resolve()
    for candidate in (current, *current.parents):
        # .git is a file for worktrees and submodules
        if (candidate / ".git").exists():
            return candidate
    return None


def parse_github_remote(remote_url: str) -> str | None:
    """
    Extract "owner/repo" from a GitHub remote URL.

    Examples:
        https://github.com/acme/shop.git -> acme/shop
        git@github.com:acme/shop.git -> acme/shop
        https://gitlab.com/acme/shop.git -> None
    """
    match = _GITHUB_REMOTE.match(remote_url.strip())
    if not match:
        return None
    return f"{match.group('owner')}/{match.group('repo')}"


class _GitUnavailable(Exception):
    """git could not be executed at all."""


def _run_git(
    args: list[str], cwd: Path, git_executable: str, timeout: float
) -> subprocess.CompletedProcess[str]:
    command = [git_executable, *args]
    try:
        return subprocess.run(
            command,
            cwd=str(cwd),
            check=False,
            text=True,
            capture_output=True,
            timeout=timeout,
        )
    except FileNotFoundError as e:
        raise _GitUnavailable(f"git executable '{git_executable}' not found") from e
    except subprocess.TimeoutExpired as e:
        raise _GitUnavailable(f"git command timed out after {timeout}s: {' '.join(command)}") from e
    except (OSError, subprocess.SubprocessError) as e:
        raise _GitUnavailable(str(e)) from e


def detect_git_info(
    start_path: str | Path,
    git_executable: str = "git",
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> GitRepoInfo | None:
    """
    Detect repository, branch and root for a path.

    Args:
        start_path: Directory to start the upward search from
        git_executable: git binary to invoke
        timeout: Per-command timeout in seconds

    Returns:
        GitRepoInfo, or None when no repository is found or git can't run
    """
    repo_root = find_repo_root(start_path)
    if repo_root is None:
        logger.debug("git_repo_not_found", start_path=str(start_path))
        return None

    try:
        remote = _run_git(["remote", "get-url", "origin"], repo_root, git_executable, timeout)
        head = _run_git(["rev-parse", "--abbrev-ref", "HEAD"], repo_root, git_executable, timeout)
    except _GitUnavailable as e:
        logger.debug("git_unavailable", repo_root=str(repo_root), reason=str(e))
        return None

    repository = None
    if remote.returncode == 0:
        remote_url = (remote.stdout or "").strip()
        repository = parse_github_remote(remote_url)
        if repository is None:
            logger.debug("git_remote_not_github", remote_url=remote_url)
    else:
        logger.debug("git_remote_missing", repo_root=str(repo_root))

    branch = (head.stdout or "").strip() if head.returncode == 0 else ""
    if not branch or branch == "HEAD":
        branch = DEFAULT_BRANCH

    info = GitRepoInfo(repository=repository, branch=branch, repo_root_path=repo_root)
    logger.debug(
        "git_repo_detected",
        repository=info.repository,
        branch=info.branch,
        repo_root=str(info.repo_root_path),
    )
    return info
