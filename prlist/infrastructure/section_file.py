"""Replacement of a marker-delimited section inside a text file."""

import logging
import re

logger = logging.getLogger(__name__)

START_MARKER = "<!--START_SECTION:prlist-->"
END_MARKER = "<!--END_SECTION:prlist-->"


def splice(document: str, start: str, end: str, new_text: str) -> str:
    """
    Replace the content between start and end markers.

    The span runs from the first line consisting of exactly the start marker
    to the nearest end marker after it. Everything outside that span,
    including whatever follows the end marker, is kept byte for byte. The new
    body is newline-terminated, using the line ending of the start marker
    line, so the end marker always starts its own line.

    Args:
        document: Full text of the target file
        start: Start marker line
        end: End marker
        new_text: Content to place between the markers

    Returns:
        Updated document, or the original one if the markers are missing
    """
    if start not in document or end not in document:
        return document

    pattern = re.compile(
        rf"^{re.escape(start)}(?P<eol>\r?\n).*?{re.escape(end)}",
        re.DOTALL | re.MULTILINE
    )

    def wrap(match: "re.Match") -> str:
        # the body follows the line ending used on the start marker line
        eol = match.group("eol")
        body = new_text.replace("\r\n", "\n")
        if body and not body.endswith("\n"):
            body += "\n"
        body = body.replace("\n", eol)
        return f"{start}{eol}{body}{end}"

    return pattern.sub(wrap, document, count=1)


def update_section_file(path: str, text: str, start: str = START_MARKER, end: str = END_MARKER) -> bool:
    """
    Splice text into the marked section of the file at path.

    The file is opened once for reading and writing. The new document is
    built completely in memory before the file is truncated and rewritten,
    and nothing is written when the content would not change.

    Returns:
        True if the file content changed
    """
    with open(path, "r+", encoding="utf-8", newline="") as f:
        original = f.read()
        updated = splice(original, start, end, text)

        if updated == original:
            if start not in original or end not in original:
                logger.warning(f"Section markers not found in {path}; file left untouched")
            else:
                logger.info(f"No changes to {path}")
            return False

        f.seek(0)
        f.truncate()
        f.write(updated)

    logger.info(f"Updated section in {path}")
    return True
