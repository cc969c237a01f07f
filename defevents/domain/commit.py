"""
Commit metadata domain object for defevents.

Carries everything the event assembler needs to know about the commit
being analyzed: who made it, when, and where it can be viewed.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Any
import re

DEFAULT_COMMIT_URL_TEMPLATE = "https://{remote}/commit/{commit}"

_SCHEME_RE = re.compile(r'^([A-Za-z][A-Za-z0-9+.-]*)://(?:[^@/]*@)?(.*)$')
_PORT_RE = re.compile(r'^([^/:]+):\d+(?=/|$)')
WEB_SCHEMES = ('http', 'https')
_SCP_RE = re.compile(r'^(?:[^@/]+@)?([^:/]+):(.+)$')


def remote_display_url(url: str) -> str:
    """
    Normalize a remote fetch URL for display.

    Strips the scheme, any user info and a trailing ``.git``, and
    rewrites scp-like SSH remotes (``git@host:owner/repo``) to
    ``host/owner/repo``. The port of non-web remotes
    (``ssh://git@host:2222/owner/repo``) is dropped.

    Examples:
        https://github.com/owner/repo.git -> github.com/owner/repo
        git@github.com:owner/repo.git     -> github.com/owner/repo
    """
    url = url.strip()
    scheme_match = _SCHEME_RE.match(url)
    if scheme_match:
        url = scheme_match.group(2)
        # drop ssh/git port
        if scheme_match.group(1).lower() not in WEB_SCHEMES:
            url = _PORT_RE.sub(r'\1', url)
    else:
        scp_match = _SCP_RE.match(url)
        if scp_match:
            url = f"{scp_match.group(1)}/{scp_match.group(2)}"
    url = url.rstrip('/')
    if url.endswith('.git'):
        url = url[:-4]
    return url


@dataclass(frozen=True)
class CommitMetadata:
    """
    Metadata of the commit whose diff is being correlated.

    Attributes:
        commit: Full commit hash
        author_name: Author full name
        author_email: Author email
        timestamp: Commit time (from the unix timestamp, UTC)
        branch: Default branch name of the remote
        remote_url: Fetch URL of the remote
        commit_url_template: Format string with {remote}, {commit}, {branch}
    """

    commit: str
    author_name: str
    author_email: str
    timestamp: datetime
    branch: str
    remote_url: str
    commit_url_template: str = DEFAULT_COMMIT_URL_TEMPLATE

    @property
    def author_first_name(self) -> str:
        parts = self.author_name.split()
        return parts[0] if parts else self.author_name

    @property
    def remote_display_url(self) -> str:
        return remote_display_url(self.remote_url)

    @property
    def commit_url(self) -> str:
        return self.commit_url_template.format(
            remote=self.remote_display_url,
            commit=self.commit,
            branch=self.branch,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'commit': self.commit,
            'author_name': self.author_name,
            'author_email': self.author_email,
            'timestamp': self.timestamp.isoformat(),
            'branch': self.branch,
            'remote': self.remote_display_url,
            'url': self.commit_url,
        }
