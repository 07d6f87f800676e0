"""GitHub REST search client for merged pull requests."""

import time
import logging
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional, Tuple
import requests

from prlist.domain.repository import SearchHit

logger = logging.getLogger(__name__)


class GitHubAPIError(Exception):
    """Raised when a GitHub API request fails or returns an unusable payload."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class RateLimitExceeded(GitHubAPIError):
    """Raised when GitHub API rate limit is exceeded."""
    pass


class SearchDeadlineExceeded(GitHubAPIError):
    """Raised when the run deadline passes before pagination finishes."""
    pass


def parse_timestamp(value: Optional[str]) -> int:
    """Convert an ISO 8601 timestamp from the API into epoch seconds."""
    if not value:
        return 0
    return int(datetime.fromisoformat(value.replace("Z", "+00:00")).timestamp())


class GitHubSearchClient:
    """Client for the GitHub issue search API.

    Requests are never retried: the first failure is raised to the caller.
    A single deadline is fixed at construction time and bounds the whole
    pagination run.
    """

    SEARCH_ENDPOINT = "https://api.github.com/search/issues"
    API_VERSION = "2022-11-28"
    PER_PAGE = 100
    REQUEST_TIMEOUT_SECONDS = 30
    DEFAULT_DEADLINE_SECONDS = 300

    def __init__(self, token: Optional[str] = None, deadline_seconds: Optional[float] = None):
        """
        Initialize GitHub search client.

        Args:
            token: GitHub personal access token. Anonymous requests if None.
            deadline_seconds: Time budget for all requests made by this client
        """
        if deadline_seconds is None:
            deadline_seconds = self.DEFAULT_DEADLINE_SECONDS

        self.deadline = time.monotonic() + deadline_seconds
        self.headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": self.API_VERSION,
        }

        if token:
            self.headers["Authorization"] = f"Bearer {token}"

    def _timeout(self) -> float:
        remaining = self.deadline - time.monotonic()
        if remaining <= 0:
            raise SearchDeadlineExceeded("Deadline exceeded while searching pull requests")
        return min(self.REQUEST_TIMEOUT_SECONDS, remaining)

    def _get(self, url: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        """
        Execute a single GET request.

        Raises:
            RateLimitExceeded: If rate limit is exceeded
            GitHubAPIError: If the API answers with an error status
            requests.RequestException: If the request itself fails
        """
        response = requests.get(
            url,
            params=params,
            headers=self.headers,
            timeout=self._timeout()
        )

        if response.status_code == 200:
            return response

        if response.status_code in (403, 429):
            remaining = response.headers.get("X-RateLimit-Remaining")
            if response.status_code == 429 or remaining == "0":
                reset_time = response.headers.get("X-RateLimit-Reset", "unknown")
                raise RateLimitExceeded(
                    f"Rate limit exceeded (resets at {reset_time})",
                    status_code=response.status_code
                )

        raise GitHubAPIError(
            f"Search request failed with status {response.status_code}: {response.text}",
            status_code=response.status_code
        )

    def search_issues_page(
        self, query: str, url: Optional[str] = None
    ) -> Tuple[List[SearchHit], Optional[str]]:
        """
        Fetch one page of issue search results.

        Args:
            query: GitHub search query string (e.g., "is:pr author:octocat is:merged")
            url: Next-page URL from a previous call. First page if None.

        Returns:
            Tuple of (list of hits, next page URL or None on the last page)
        """
        if url is None:
            params = {
                "q": query,
                "sort": "updated",
                "order": "desc",
                "per_page": self.PER_PAGE,
            }
            response = self._get(self.SEARCH_ENDPOINT, params=params)
        else:
            # the Link header URL already carries every query parameter
            response = self._get(url)

        try:
            data = response.json()
            items = data["items"]
            hits = []
            for item in items:
                pull_request = item.get("pull_request") or {}
                hits.append(SearchHit(
                    repository_url=item.get("repository_url") or "",
                    merged_at=parse_timestamp(pull_request.get("merged_at"))
                ))
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise GitHubAPIError(f"Malformed search response: {e}") from e

        next_url = response.links.get("next", {}).get("url")
        return hits, next_url

    def search_merged_pull_requests(self, user: str) -> Iterator[SearchHit]:
        """
        Iterate over every merged pull request authored by user.

        Pages are fetched lazily, one at a time, until the API stops
        advertising a next page.
        """
        query = f"is:pr author:{user} is:merged"
        next_url = None
        page = 0

        while True:
            hits, next_url = self.search_issues_page(query, next_url)
            page += 1
            logger.info(f"Fetched search page {page} for {user} ({len(hits)} results)")

            yield from hits

            if not next_url:
                break
