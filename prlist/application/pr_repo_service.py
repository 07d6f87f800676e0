"""Application service for collecting repositories with merged PRs."""

import logging
from typing import Dict, Iterable, List, Optional, Tuple
from urllib.parse import urlparse

from prlist.domain.ignore import Ignore
from prlist.domain.repository import Repo, SearchHit
from prlist.infrastructure.github_client import GitHubSearchClient

logger = logging.getLogger(__name__)


def owner_repo_from_api_url(api_url: str) -> Tuple[str, str]:
    """
    Parse "https://api.github.com/repos/owner/repo" into (owner, repo).

    Falls back to the first two path segments when the "repos" segment is
    missing. Returns empty strings when nothing usable is found.
    """
    try:
        path = urlparse(api_url).path
    except ValueError:
        return "", ""

    parts = path.lstrip("/").split("/")
    if len(parts) >= 3 and parts[0] == "repos":
        return parts[1], parts[2]
    if len(parts) >= 2:
        return parts[0], parts[1]
    return "", ""


def sort_by_recency(found: Dict[Repo, int]) -> List[Repo]:
    """Order repos by latest merge time, newest first, ties by owner then name."""
    return sorted(found, key=lambda repo: (-found[repo], repo.owner, repo.name))


class PullRequestRepoService:
    """Service for finding repositories where a user has merged PRs."""

    def __init__(self, search_client: GitHubSearchClient):
        """
        Initialize the service.

        Args:
            search_client: Client used to page through search results
        """
        self.search_client = search_client

    def collect(self, hits: Iterable[SearchHit], ignore: Optional[Ignore] = None) -> Dict[Repo, int]:
        """
        Fold search hits into a map of repo to most recent merge time.

        Args:
            hits: Search hits in any order
            ignore: Rules for repos that must not appear in the result

        Returns:
            Mapping of each kept repo to the latest merge timestamp seen
        """
        found: Dict[Repo, int] = {}
        skipped = 0

        for hit in hits:
            owner, name = owner_repo_from_api_url(hit.repository_url)
            if not owner or not name:
                skipped += 1
                continue

            repo = Repo(owner, name)
            if ignore is not None and ignore.match(repo):
                skipped += 1
                continue

            previous = found.get(repo)
            if previous is None or hit.merged_at > previous:
                found[repo] = hit.merged_at

        logger.info(f"Collected {len(found)} repositories ({skipped} results skipped)")
        return found

    def find_merged_pr_repos(self, user: str, ignore: Optional[Ignore] = None) -> List[Repo]:
        """
        Search merged PRs by user and return the unique repositories.

        Any error raised by the search client aborts the whole search.

        Args:
            user: GitHub login of the PR author
            ignore: Rules for repos, owners or names to exclude

        Returns:
            Repositories ordered by most recent merge first
        """
        logger.info(f"Searching merged pull requests authored by {user}")
        hits = self.search_client.search_merged_pull_requests(user)
        return sort_by_recency(self.collect(hits, ignore))
