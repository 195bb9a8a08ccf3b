"""Display URL templates.

A display URL template is a string with positional placeholders:

    {0}  document id
    {1}  version series id
    {2}  object store name

Text between single quotes is copied literally and ``''`` produces one
apostrophe. Every value is percent-escaped before it is substituted, both
when the template is resolved at startup and when document URLs are built.

Example:
    >>> fill_display_url("/getContent?id={0}&os={2}", "{A B}", "{C}", "OS1")
    '/getContent?id=%7BA%20B%7D&os=OS1'
"""

import logging
import re
from typing import Sequence
from urllib.parse import quote

from .uri import ValidatedUri, is_absolute

logger = logging.getLogger(__name__)

ZERO_ID = "{00000000-0000-0000-0000-000000000000}"

_ARGUMENT_INDEX = re.compile(r"[0-9]+")


def percent_escape(value: str) -> str:
    """Escape every character that is not unreserved in a URI."""
    return quote(str(value), safe="")


def format_message(pattern: str, args: Sequence[str]) -> str:
    """Substitute positional arguments into a quoted template.

    Args:
        pattern: Template containing ``{n}`` placeholders.
        args: Replacement values, indexed by placeholder number.

    Returns:
        The filled string.

    Raises:
        ValueError: If braces are unbalanced or a placeholder is not a
            valid argument index.
    """
    out = []
    i, n = 0, len(pattern)
    in_quote = False
    while i < n:
        c = pattern[i]
        if c == "'":
            if i + 1 < n and pattern[i + 1] == "'":
                out.append("'")
                i += 2
            else:
                in_quote = not in_quote
                i += 1
            continue
        if c == "{" and not in_quote:
            end = pattern.find("}", i + 1)
            if end == -1:
                raise ValueError("Unmatched braces in the pattern")
            index = pattern[i + 1:end].strip()
            if not _ARGUMENT_INDEX.fullmatch(index):
                raise ValueError(f"Can't parse argument number: {index}")
            position = int(index)
            if position >= len(args):
                raise ValueError(f"Argument number out of range: {position}")
            out.append(args[position])
            i = end + 1
            continue
        out.append(c)
        i += 1
    return "".join(out)


def fill_display_url(
    pattern: str,
    document_id: str,
    version_series_id: str,
    object_store_name: str,
) -> str:
    """Build a display URL from a template and escaped identifiers."""
    return format_message(
        pattern,
        [
            percent_escape(document_id),
            percent_escape(version_series_id),
            percent_escape(object_store_name),
        ],
    )


def resolve_display_url_pattern(
    pattern: str,
    content_engine_url: ValidatedUri,
    object_store_name: str,
) -> str:
    """Make a display URL template absolute.

    Relative templates borrow the scheme and authority of the content engine
    URL. The resolved template is probed with the zero id, and its host is
    checked for reachability without failing.

    Args:
        pattern: User supplied template, relative or absolute.
        content_engine_url: Validated content engine base URL.
        object_store_name: Object store substituted into the probe.

    Returns:
        The absolute template.

    Raises:
        ValueError: If the template is malformed or does not produce a
            valid absolute URI. ``InvalidUri`` is a ``ValueError``.
    """
    probe = fill_display_url(pattern, ZERO_ID, ZERO_ID, object_store_name)
    if not is_absolute(probe):
        separator = "" if pattern.startswith("/") else "/"
        pattern = (
            f"{content_engine_url.scheme}://{content_engine_url.raw_authority}"
            f"{separator}{pattern}"
        )
        logger.debug(f"Resolved relative display URL template to {pattern}")

    probe = fill_display_url(pattern, ZERO_ID, ZERO_ID, object_store_name)
    ValidatedUri(probe).log_unreachable_host()
    return pattern
