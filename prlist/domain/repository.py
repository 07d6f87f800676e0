"""Domain entities for repositories and search results."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Repo:
    """Immutable repository identity, keyed by owner and name."""
    
    owner: str
    name: str
    
    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class SearchHit:
    """A single merged pull request returned by the search API."""
    
    repository_url: str
    merged_at: int  # seconds since epoch
