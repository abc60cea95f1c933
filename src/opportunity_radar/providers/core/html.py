"""Heuristic extraction of listing entries from article-style HTML pages."""
from dataclasses import dataclass
from enum import Enum
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag


class DescriptionFrom(str, Enum):
    """Where an entry's description text is taken from."""

    NONE = "none"
    PARENT = "parent"
    NEXT_SIBLING = "next_sibling"


@dataclass(frozen=True)
class ListingRule:
    """How to pick entries out of one page.

    Attributes:
        selector: CSS selector for candidate elements (headings, cards).
        min_length: Minimum length of the element text.
        max_length: Maximum length of the element text; None for no limit.
        limit: Maximum number of entries returned.
        exclude_words: Case-insensitive words that disqualify an element.
        description_from: Source of the description text.
        description_length: Characters kept from the description source.
    """

    selector: str
    min_length: int
    max_length: int | None
    limit: int
    exclude_words: tuple[str, ...] = ()
    description_from: DescriptionFrom = DescriptionFrom.NONE
    description_length: int = 200


@dataclass(frozen=True)
class ListingEntry:
    name: str
    description: str | None
    link: str | None


def _text(element: Tag | None) -> str:
    if element is None:
        return ""
    return " ".join(element.get_text(" ").split())


def _link(element: Tag, base_url: str | None) -> str | None:
    anchor = element if element.name == "a" else element.find("a", href=True)
    if anchor is None or not anchor.get("href"):
        return None
    href = anchor["href"]
    return urljoin(base_url, href) if base_url else href


def _description(element: Tag, rule: ListingRule) -> str | None:
    if rule.description_from is DescriptionFrom.PARENT:
        text = _text(element.parent)
    elif rule.description_from is DescriptionFrom.NEXT_SIBLING:
        text = _text(element.find_next_sibling())
    else:
        return None
    return text[: rule.description_length] or None


def _accepted(text: str, rule: ListingRule) -> bool:
    if len(text) < rule.min_length:
        return False
    if rule.max_length is not None and len(text) > rule.max_length:
        return False
    lowered = text.lower()
    return not any(word in lowered for word in rule.exclude_words)


def extract_listing(html: str, rule: ListingRule, base_url: str | None = None) -> list[ListingEntry]:
    """Return up to `rule.limit` entries in document order, first occurrence of each name."""
    soup = BeautifulSoup(html, "html.parser")
    entries: list[ListingEntry] = []
    seen: set[str] = set()
    for element in soup.select(rule.selector):
        text = _text(element)
        if not _accepted(text, rule) or text.lower() in seen:
            continue
        seen.add(text.lower())
        entries.append(
            ListingEntry(name=text, description=_description(element, rule), link=_link(element, base_url))
        )
        if len(entries) >= rule.limit:
            break
    return entries

