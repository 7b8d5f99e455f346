"""Recognition of repository URLs that a VCS-backed repository can serve.

A URL dependency whose host is recognized here becomes a VCS side repository;
any other URL is downloaded as a plain file. Only the URL shape is inspected:
nothing is fetched and no command is run.
"""

import re
from enum import StrEnum, unique

from pydantic import BaseModel, ConfigDict

DEFAULT_GITHUB_DOMAINS: tuple[str, ...] = ("github.com",)
DEFAULT_GITLAB_DOMAINS: tuple[str, ...] = ("gitlab.com",)

_GITHUB_PATTERN = re.compile(r"^((?:https?|git)://([^/]+)/|git@([^:]+):/?)([^/]+)/([^/]+?)(?:\.git|/)?$")
_GITLAB_PATTERN = re.compile(r"^(?:https?://([^/:]+?)(?::[0-9]+)?/|git@([^:]+):)(.+)/([^/]+?)(?:\.git|/)?$")
_GIT_BITBUCKET_PATTERN = re.compile(r"^https?://bitbucket\.org/([^/]+)/([^/]+?)(?:\.git|/?)?$", re.IGNORECASE)
_GIT_PATTERN = re.compile(r"(^git://|\.git/?$|git(?:olite)?@|//git\.|//github\.com/)", re.IGNORECASE)
_HG_PATTERN = re.compile(r"(^(?:https?|ssh)://(?:[^@]+@)?bitbucket\.org|https://(?:.*?)\.kilnhg\.com)", re.IGNORECASE)
_SVN_PATTERN = re.compile(r"(^svn://|^svn\+ssh://|svn\.)", re.IGNORECASE)
_SVN_OVER_HTTP_PATTERN = re.compile(r"/svn|svn/", re.IGNORECASE)


@unique
class VcsHostKind(StrEnum):
    GITHUB = "github"
    GITLAB = "gitlab"
    GIT_BITBUCKET = "git-bitbucket"
    GIT = "git"
    HG = "hg"
    PERFORCE = "perforce"
    SVN = "svn"


class VcsHostRegistry(BaseModel):
    """The host matchers, tried in order. The domain lists feed the GitHub and GitLab matchers."""

    model_config = ConfigDict(frozen=True)

    github_domains: tuple[str, ...] = DEFAULT_GITHUB_DOMAINS
    gitlab_domains: tuple[str, ...] = DEFAULT_GITLAB_DOMAINS

    def is_known_vcs_host(self, url: str) -> bool:
        return self.find_host(url) is not None

    def find_host(self, url: str) -> VcsHostKind | None:
        """Return the first host kind that recognizes the URL."""
        for kind in VcsHostKind:
            if self.supports(kind, url):
                return kind
        return None

    def supports(self, kind: VcsHostKind, url: str) -> bool:
        match kind:
            case VcsHostKind.GITHUB:
                github_match = _GITHUB_PATTERN.match(url)
                if github_match is None:
                    return False
                domain = github_match.group(2) or github_match.group(3)
                return _strip_www(domain) in self.github_domains
            case VcsHostKind.GITLAB:
                gitlab_match = _GITLAB_PATTERN.match(url)
                if gitlab_match is None:
                    return False
                domain = gitlab_match.group(1) or gitlab_match.group(2)
                return _strip_www(domain) in self.gitlab_domains
            case VcsHostKind.GIT_BITBUCKET:
                return _GIT_BITBUCKET_PATTERN.match(url) is not None
            case VcsHostKind.GIT:
                return _GIT_PATTERN.search(url) is not None
            case VcsHostKind.HG:
                return _HG_PATTERN.search(url) is not None
            case VcsHostKind.PERFORCE:
                # Recognizing a depot needs a server round-trip, so no URL shape qualifies.
                return False
            case VcsHostKind.SVN:
                if url.startswith("http") and "://" in url and _SVN_OVER_HTTP_PATTERN.search(url):
                    url = "svn" + url[url.index("://") :]
                return _SVN_PATTERN.search(url) is not None


def _strip_www(domain: str) -> str:
    domain = domain.lower()
    return domain.removeprefix("www.")


DEFAULT_VCS_HOSTS = VcsHostRegistry()
