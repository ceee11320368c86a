"""Tests for git repository detection.

All git invocations are mocked; only the .git marker lives on disk.
"""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from oceanhost.git import detect_git_info, find_repo_root, parse_github_remote


def _completed(stdout="", returncode=0):
    result = MagicMock()
    result.stdout = stdout
    result.returncode = returncode
    return result


@pytest.fixture
def repo_dir(tmp_path):
    """A directory tree with a .git marker at its root."""
    (tmp_path / ".git").mkdir()
    nested = tmp_path / "services" / "api"
    nested.mkdir(parents=True)
    return tmp_path


class TestParseGithubRemote:
    """Tests for parse_github_remote."""

    @pytest.mark.parametrize(
        "url",
        [
            "https://github.com/acme/shop.git",
            "https://github.com/acme/shop",
            "https://token@github.com/acme/shop.git",
            "git@github.com:acme/shop.git",
            "ssh://git@github.com/acme/shop.git",
            "https://github.com/acme/shop/",
        ],
    )
    def test_github_urls(self, url):
        assert parse_github_remote(url) == "acme/shop"

    @pytest.mark.parametrize(
        "url",
        ["https://gitlab.com/acme/shop.git", "git@bitbucket.org:acme/shop.git", "", "not a url"],
    )
    def test_non_github_urls(self, url):
        assert parse_github_remote(url) is None


class TestFindRepoRoot:
    def test_walks_upward(self, repo_dir):
        """Test the root is found from a nested directory."""
        assert find_repo_root(repo_dir / "services" / "api") == repo_dir.resolve()

    def test_git_file_marker(self, tmp_path):
        """Test worktrees, where .git is a file, are detected."""
        (tmp_path / ".git").write_text("gitdir: /elsewhere\n")

        assert find_repo_root(tmp_path) == tmp_path.resolve()


class TestDetectGitInfo:
    """Tests for detect_git_info."""

    @patch("oceanhost.git.subprocess.run")
    def test_detects_repository_and_branch(self, mock_run, repo_dir):
        mock_run.side_effect = [
            _completed("git@github.com:acme/shop.git\n"),
            _completed("feature/x\n"),
        ]

        info = detect_git_info(repo_dir / "services" / "api")

        assert info.repository == "acme/shop"
        assert info.branch == "feature/x"
        assert info.repo_root_path == repo_dir.resolve()

    @patch("oceanhost.git.subprocess.run")
    def test_commands_run_in_repo_root_with_timeout(self, mock_run, repo_dir):
        mock_run.side_effect = [_completed("https://github.com/a/b"), _completed("main")]

        detect_git_info(repo_dir, git_executable="/usr/bin/git", timeout=2.0)

        first_call = mock_run.call_args_list[0]
        assert first_call.args[0] == ["/usr/bin/git", "remote", "get-url", "origin"]
        assert first_call.kwargs["cwd"] == str(repo_dir.resolve())
        assert first_call.kwargs["timeout"] == 2.0

    @patch("oceanhost.git.subprocess.run")
    def test_no_repository(self, mock_run, tmp_path):
        """Test a directory outside any repository yields None without running git."""
        with patch("oceanhost.git.find_repo_root", return_value=None):
            assert detect_git_info(tmp_path) is None

        mock_run.assert_not_called()

    @patch("oceanhost.git.subprocess.run", side_effect=FileNotFoundError("git"))
    def test_missing_git_binary(self, mock_run, repo_dir):
        """Test a missing git binary fails soft."""
        assert detect_git_info(repo_dir) is None

    @patch(
        "oceanhost.git.subprocess.run",
        side_effect=subprocess.TimeoutExpired(cmd="git", timeout=5),
    )
    def test_timeout(self, mock_run, repo_dir):
        assert detect_git_info(repo_dir) is None

    @patch("oceanhost.git.subprocess.run")
    def test_missing_remote(self, mock_run, repo_dir):
        """Test no origin remote leaves the repository unset."""
        mock_run.side_effect = [_completed("", returncode=2), _completed("main\n")]

        info = detect_git_info(repo_dir)

        assert info is not None
        assert info.repository is None
        assert info.branch == "main"

    @patch("oceanhost.git.subprocess.run")
    def test_non_github_remote(self, mock_run, repo_dir):
        mock_run.side_effect = [_completed("https://gitlab.com/a/b.git"), _completed("main")]

        assert detect_git_info(repo_dir).repository is None

    @patch("oceanhost.git.subprocess.run")
    def test_detached_head_defaults_to_main(self, mock_run, repo_dir):
        mock_run.side_effect = [_completed("https://github.com/a/b"), _completed("HEAD\n")]

        assert detect_git_info(repo_dir).branch == "main"

    @patch("oceanhost.git.subprocess.run")
    def test_branch_lookup_failure_defaults_to_main(self, mock_run, repo_dir):
        mock_run.side_effect = [
            _completed("https://github.com/a/b"),
            _completed("", returncode=128),
        ]

        assert detect_git_info(repo_dir).branch == "main"
