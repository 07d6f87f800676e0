"""Ignore rules for excluding repositories from the PR list."""

import logging
from dataclasses import dataclass, field
from typing import FrozenSet, Optional

from prlist.domain.repository import Repo

logger = logging.getLogger(__name__)

WILDCARD = "*"


@dataclass(frozen=True)
class Ignore:
    """Sets of owners, names or explicit repos that should be skipped."""

    owners: FrozenSet[str] = field(default_factory=frozenset)
    names: FrozenSet[str] = field(default_factory=frozenset)
    repos: FrozenSet[Repo] = field(default_factory=frozenset)

    @classmethod
    def from_string(cls, spec: Optional[str]) -> "Ignore":
        """
        Parse an ignore specification.

        The format is a colon-separated list of owner/name pairs. Use
        "owner/*" to ignore every repo of an owner and "*/name" to ignore
        every repo with that name. Malformed tokens are dropped.

        Args:
            spec: Ignore specification, e.g. "org/*:*/dotfiles:me/repo"

        Returns:
            Ignore instance
        """
        owners = set()
        names = set()
        repos = set()

        for token in (spec or "").split(":"):
            token = token.strip()
            if not token:
                continue
            owner, sep, name = token.partition("/")
            if not sep or not owner or not name:
                logger.debug(f"Skipping malformed ignore token: {token!r}")
                continue
            if owner == WILDCARD:
                names.add(name)
            elif name == WILDCARD:
                owners.add(owner)
            else:
                repos.add(Repo(owner, name))

        return cls(frozenset(owners), frozenset(names), frozenset(repos))

    def match(self, repo: Repo) -> bool:
        """Report whether the given repo should be ignored."""
        return (
            repo in self.repos
            or repo.owner in self.owners
            or repo.name in self.names
        )
