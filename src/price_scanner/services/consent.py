"""
Cookie/consent banner detection for parsed HTML.

Works on BeautifulSoup elements. A node counts as part of a consent
banner when it (or one of its nearest ancestors) carries consent-ish
attributes, or talks about cookies/privacy and offers an accept/reject
style control.
"""

import logging
import re
from itertools import islice
from typing import Optional, List

from bs4.element import Tag

from price_scanner.config import settings

logger = logging.getLogger(__name__)

CONSENT_TEXT_REGEX = re.compile(
    r"""
    \bcookie\b|\bcookies\b|\bconsent\b|\bgdpr\b|\bprivacy\b|\btracking\b|\bpreferences\b|\bpersonaliz|marketing\s+cookies|
    do\s+not\s+sell|opt\s+out|opt\s+in|cookie\s+policy|privacy\s+policy|
    \bciasteczk(?:a|i|ami|ach|om)?\b|\bprywatn|\bzgod(?:a|y|ę|zie)?\b|\brodo\b
    """,
    re.IGNORECASE | re.VERBOSE,
)

CONSENT_ACTION_REGEX = re.compile(
    r"""
    \baccept\b|\bagree\b|\ballow\b|\bmanage\b|\bpreferences\b|\bdecline\b|\breject\b|\bok\b|\bokay\b|\bcontinue\b|save\s+preferences|
    accept\s+all|allow\s+all|got\s+it|\brozumiem\b|\bzgadzam\b|\bakceptuj|\bzaakceptuj|\bodrzuc|\bodmow
    """,
    re.IGNORECASE | re.VERBOSE,
)

CONSENT_ATTR_REGEX = re.compile(
    r"""
    cookie|consent|gdpr|privacy|cmp|onetrust|trustarc|cookielaw|cookiebot|osano|
    quantcast|usercentrics|didomi|cookieyes|termly|iubenda|shopify-pc__banner
    """,
    re.IGNORECASE | re.VERBOSE,
)

ATTR_KEYS = ('id', 'class', 'role', 'aria-label', 'aria-modal')
ACTION_SELECTOR = "button, [role='button'], input[type='button'], input[type='submit'], a"


def is_consent_node(node: Optional[Tag], depth: Optional[int] = None) -> bool:
    """
    Check whether an element belongs to a cookie/consent banner.

    Args:
        node: Element to classify
        depth: How many ancestors to inspect (default from settings)

    Returns:
        True for an attribute hit, or a text hit backed by an action control
    """
    if node is None:
        return False

    if depth is None:
        depth = settings.CONSENT_ANCESTOR_DEPTH

    nodes = [node, *islice(node.parents, depth)]
    text_hit, attr_hit, action_hit = _detect_hits(nodes)

    if not (text_hit or attr_hit):
        return False

    matched = attr_hit or (text_hit and action_hit)
    if matched:
        logger.debug("Consent banner detected", extra={
            "tag": node.name,
            "text_hit": text_hit,
            "attr_hit": attr_hit,
            "action_hit": action_hit,
        })
    return matched


def _detect_hits(nodes: List[Tag]) -> tuple[bool, bool, bool]:
    text_hit = attr_hit = action_hit = False
    for item in nodes:
        text_hit = text_hit or CONSENT_TEXT_REGEX.search(item.get_text(" ")) is not None
        attr_hit = attr_hit or CONSENT_ATTR_REGEX.search(_attribute_text(item)) is not None
        action_hit = action_hit or _has_action_button(item)
    return text_hit, attr_hit, action_hit


def _attr_value(node: Tag, key: str) -> Optional[str]:
    value = node.get(key)
    if isinstance(value, list):
        # Multi-valued attributes such as class come back as lists
        return " ".join(value)
    return value


def _attribute_text(node: Tag) -> str:
    values = (_attr_value(node, key) for key in ATTR_KEYS)
    return " ".join(value for value in values if value is not None)


def _has_action_button(node: Tag) -> bool:
    return any(
        CONSENT_ACTION_REGEX.search(_collect_text(button))
        for button in node.select(ACTION_SELECTOR)
    )


def _collect_text(node: Tag) -> str:
    parts = [node.get_text(" "), *(_attr_value(node, key) for key in ('aria-label', 'title', 'value'))]
    return " ".join(part for part in parts if part is not None)
