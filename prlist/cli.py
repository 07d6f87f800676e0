"""Command line entry point: update a file with repos that merged a user's PRs."""

import argparse
import logging
import os
from typing import List, Optional

from prlist.application.pr_repo_service import PullRequestRepoService
from prlist.application.renderers import FORMATS, render
from prlist.domain.ignore import Ignore
from prlist.infrastructure.github_client import GitHubSearchClient
from prlist.infrastructure.section_file import update_section_file

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse CLI flags. Exits with status 2 when a required flag is missing or empty."""
    parser = argparse.ArgumentParser(
        prog="prlist",
        description=(
            "Replace the content between <!--START_SECTION:prlist--> and "
            "<!--END_SECTION:prlist--> with repositories that merged PRs "
            "authored by a GitHub user."
        ),
    )
    parser.add_argument("-file", "--file", required=True, help="target file to update")
    parser.add_argument("-user", "--user", required=True, help="GitHub username to search PRs for")
    parser.add_argument(
        "-ignore", "--ignore", default="",
        help='colon-separated repos to ignore, e.g. "org/*:*/repo:owner/name"'
    )
    parser.add_argument(
        "-format", "--format", default="md", choices=FORMATS,
        help="output format (default: md)"
    )
    args = parser.parse_args(argv)
    if not args.file or not args.user:
        parser.error("-file and -user must be non-empty")
    return args


def run(file: str, user: str, ignore: str = "", fmt: str = "md",
        search_client: Optional[GitHubSearchClient] = None) -> bool:
    """
    Search, render and splice the PR list into file.

    Returns:
        True if the file content changed
    """
    if search_client is None:
        search_client = GitHubSearchClient(token=os.getenv("GITHUB_TOKEN"))

    service = PullRequestRepoService(search_client)
    repos = service.find_merged_pr_repos(user, Ignore.from_string(ignore))
    logger.info(f"Found {len(repos)} repositories with merged PRs by {user}")

    text = render(fmt, user, repos)
    return update_section_file(file, text)


def main(argv: Optional[List[str]] = None) -> int:
    """Update the target file with the merged-PR repository list."""
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)

    try:
        if not os.getenv("GITHUB_TOKEN"):
            logger.warning("GITHUB_TOKEN not found. Using unauthenticated requests (limited rate).")

        run(args.file, args.user, args.ignore, args.format)
        return 0

    except Exception as e:
        logger.error(f"PR list update failed: {e}", exc_info=True)
        return 1
