"""
Reference extraction and link filtering.
"""
from __future__ import annotations

from typing import AbstractSet, Iterator, Optional, Tuple
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup

# Elements whose attribute references another resource, in checking order
LINK_ATTRIBUTES: Tuple[Tuple[str, str], ...] = (
    ("a", "href"),
    ("area", "href"),
    ("audio", "src"),
    ("embed", "src"),
    ("iframe", "src"),
    ("img", "src"),
    ("input", "src"),
    ("link", "href"),
    ("object", "data"),
    ("script", "src"),
    ("source", "src"),
    ("track", "src"),
    ("video", "src"),
)


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


def extract_links(soup: BeautifulSoup, base: str) -> Iterator[str]:
    """
    Yield every referenced URL in the document, resolved against base.

    Tag types are visited in LINK_ATTRIBUTES order and elements in document
    order within each tag type. Empty attribute values are skipped;
    fragments are kept. A value that cannot be resolved is yielded as-is
    so the link check reports it.
    """
    for tag_name, attribute in LINK_ATTRIBUTES:
        for element in soup.find_all(tag_name):
            value = element.get(attribute)
            if not value:
                continue
            try:
                yield urljoin(base, value)
            except ValueError:
                yield value


def hostname(url: str) -> Optional[str]:
    try:
        return urlparse(url).hostname
    except ValueError:
        return None


def is_link_allowed(
    link: str,
    base: str,
    only_same_domain: bool,
    links_to_ignore: AbstractSet[str],
) -> bool:
    """Check if a resolved link should be queued for checking."""
    if only_same_domain and hostname(link) != hostname(base):
        return False
    # Exact string match, no normalization
    return link not in links_to_ignore
