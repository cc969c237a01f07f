"""
Git client infrastructure for defevents.

Provides the commit data the event pipeline needs:
- Unified diff of the commit (context width 1)
- Commit hash, author and time
- Default branch and fetch URL of the remote

Every query is fail-fast: a failing git command, or output that does
not contain the expected fields, raises and aborts the run.
"""

import subprocess
from datetime import datetime, timezone
from typing import Optional, Tuple
import re
import logging

from ..domain import CommitMetadata
from ..domain.commit import DEFAULT_COMMIT_URL_TEMPLATE
from ..exit_codes import MetadataError, VCSError
from ..utils import run_command

logger = logging.getLogger(__name__)

DIFF_CONTEXT_LINES = 1
AUTHOR_FORMAT = "%an|%ae|%at"

HEAD_BRANCH_RE = re.compile(r'HEAD branch: (\S+)')
FETCH_URL_RE = re.compile(r'Fetch URL: (\S+)')


class GitClient:
    """
    Abstraction over the git commands used to describe one commit.

    Example:
        client = GitClient()
        diff = client.show("/path/to/repo")
        meta = client.metadata("/path/to/repo")
    """

    def __init__(
        self,
        timeout: int = 30,
        remote: str = "origin",
        commit_url_template: str = DEFAULT_COMMIT_URL_TEMPLATE,
    ):
        """
        Initialize GitClient.

        Args:
            timeout: Command timeout in seconds (default: 30)
            remote: Remote whose default branch and URL are reported
            commit_url_template: Template used for CommitMetadata.commit_url
        """
        self.timeout = timeout
        self.remote = remote
        self.commit_url_template = commit_url_template

    @classmethod
    def from_config(cls, config: dict) -> 'GitClient':
        git = config.get('git', {})
        events = config.get('events', {})
        return cls(
            timeout=git.get('timeout_seconds', 30),
            remote=git.get('remote', 'origin'),
            commit_url_template=events.get('commit_url_template', DEFAULT_COMMIT_URL_TEMPLATE),
        )

    def _run(self, args: list, cwd: str) -> str:
        """Run a git command and return its stdout, raising VCSError on failure."""
        cmd = ["git"] + args
        try:
            output, _ = run_command(
                cmd,
                cwd=cwd,
                capture_output=True,
                check=True,
                timeout=self.timeout,
            )
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise VCSError(f"git {' '.join(args)} failed: {stderr or e}") from e
        except subprocess.TimeoutExpired as e:
            raise VCSError(f"git {' '.join(args)} timed out after {self.timeout}s") from e
        except OSError as e:
            raise VCSError(f"Could not run git: {e}") from e
        return output or ""

    def show(self, path: str, rev: str = "HEAD") -> str:
        """Unified diff of ``rev`` against its parent, with one line of context."""
        return self._run(["show", f"--unified={DIFF_CONTEXT_LINES}", rev], cwd=path)

    def commit_hash(self, path: str, rev: str = "HEAD") -> str:
        return self._run(["rev-parse", rev], cwd=path).strip()

    def author(self, path: str, rev: str = "HEAD") -> Tuple[str, str, datetime]:
        """
        Author of a commit.

        Returns:
            Tuple of (full name, email, commit time)

        Raises:
            MetadataError: If the author line does not have exactly three fields
        """
        line = self._run(["log", "-1", f"--format={AUTHOR_FORMAT}", rev], cwd=path).strip()
        parts = line.split("|")
        if len(parts) != 3:
            raise MetadataError(f"Unexpected author line: {line!r}")
        name, email, ts = parts
        try:
            timestamp = datetime.fromtimestamp(int(ts), tz=timezone.utc)
        except ValueError as e:
            raise MetadataError(f"Invalid commit timestamp {ts!r}") from e
        return name, email, timestamp

    def remote_info(self, path: str, remote: Optional[str] = None) -> Tuple[str, str]:
        """
        Default branch and fetch URL of a remote (the configured one by default).

        Raises:
            VCSError: If either is missing from ``git remote show`` output
        """
        remote = remote or self.remote
        output = self._run(["remote", "show", remote], cwd=path)

        branch_match = HEAD_BRANCH_RE.search(output)
        if not branch_match:
            raise VCSError(f"No HEAD branch found for remote {remote!r}")
        url_match = FETCH_URL_RE.search(output)
        if not url_match:
            raise VCSError(f"No fetch URL found for remote {remote!r}")

        return branch_match.group(1), url_match.group(1)

    def metadata(self, path: str, rev: str = "HEAD") -> CommitMetadata:
        """Collect everything the event assembler needs about ``rev``."""
        commit = self.commit_hash(path, rev)
        name, email, timestamp = self.author(path, rev)
        branch, remote_url = self.remote_info(path)
        logger.debug(f"Commit {commit[:8]} by {name} on {branch}")
        return CommitMetadata(
            commit=commit,
            author_name=name,
            author_email=email,
            timestamp=timestamp,
            branch=branch,
            remote_url=remote_url,
            commit_url_template=self.commit_url_template,
        )
