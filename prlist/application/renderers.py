"""Renderers turning a list of repositories into Markdown or HTML."""

import html
import logging
import re
from typing import Callable, Dict, Sequence
from urllib.parse import quote, urlencode, urlunsplit

from prlist.domain.repository import Repo

logger = logging.getLogger(__name__)

GITHUB_HOST = "github.com"

_MARKDOWN_SPECIAL = re.compile(r"([\\\[\]])")


def build_search_link(user: str, repo: Repo) -> str:
    """Build a GitHub URL listing the PRs authored by user in repo."""
    # e.g. https://github.com/rpgp/rpgp/pulls?q=is%3Apr+author%3Aasciimoth
    path = f"/{quote(repo.owner, safe='')}/{quote(repo.name, safe='')}/pulls"
    query = urlencode({"q": f"is:pr author:{user}"})
    return urlunsplit(("https", GITHUB_HOST, path, query, ""))


def _markdown_text(text: str) -> str:
    return _MARKDOWN_SPECIAL.sub(r"\\\1", text)


def _html_anchor(user: str, repo: Repo) -> str:
    href = html.escape(build_search_link(user, repo), quote=True)
    return f'<a href="{href}">{html.escape(repo.full_name)}</a>'


def render_markdown(user: str, repos: Sequence[Repo]) -> str:
    """Render repos as a Markdown list of links."""
    return "\n".join(
        f"- [{_markdown_text(repo.full_name)}]({build_search_link(user, repo)})"
        for repo in repos
    )


def render_html_list(user: str, repos: Sequence[Repo]) -> str:
    """Render repos as an HTML unordered list of links."""
    items = [f"<li> {_html_anchor(user, repo)} </li>\n" for repo in repos]
    return "<ul>\n" + "".join(items) + "</ul>"


def render_html_br(user: str, repos: Sequence[Repo]) -> str:
    """Render repos as HTML links separated by <br> tags."""
    return "\n".join(f"{_html_anchor(user, repo)} <br>" for repo in repos)


RENDERERS: Dict[str, Callable[[str, Sequence[Repo]], str]] = {
    "md": render_markdown,
    "html": render_html_list,
    "html-br": render_html_br,
}

FORMATS = tuple(RENDERERS)


def render(fmt: str, user: str, repos: Sequence[Repo]) -> str:
    """
    Render repos in the requested format.

    An unknown format renders as an empty string, which clears the target
    section when spliced into a file.

    Args:
        fmt: One of "md", "html" or "html-br"
        user: GitHub login used in the PR search links
        repos: Repositories in display order

    Returns:
        Rendered text
    """
    renderer = RENDERERS.get(fmt)
    if renderer is None:
        logger.warning(f"Unknown output format {fmt!r}; rendering nothing")
        return ""
    return renderer(user, repos)
