"""Pagination links returned alongside list responses."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Mapping
from urllib.parse import parse_qs, urlsplit

_INTEGER = re.compile(r"[+-]?\d+")


@dataclass
class Pages:
    """URLs of the neighbouring pages of a paginated list."""

    first: str = ""
    prev: str = ""
    last: str = ""
    next: str = ""

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "Pages":
        return Pages(
            first=data.get("first") or "",
            prev=data.get("prev") or "",
            last=data.get("last") or "",
            next=data.get("next") or "",
        )

    def current(self) -> int:
        if not self.prev and self.next:
            return 1
        if self.prev:
            return page_for_url(self.prev) + 1
        return 0

    def is_last(self) -> bool:
        return not self.last


@dataclass
class LinkAction:
    """A reference to an action started by a request."""

    id: int = 0
    rel: str = ""
    href: str = ""

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "LinkAction":
        return LinkAction(
            id=data.get("id") or 0,
            rel=data.get("rel") or "",
            href=data.get("href") or "",
        )


@dataclass
class Links:
    """Links returned with a list response."""

    pages: Pages | None = None
    actions: list[LinkAction] = field(default_factory=list)

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "Links":
        pages = data.get("pages")
        return Links(
            pages=Pages.from_dict(pages) if pages is not None else None,
            actions=[LinkAction.from_dict(a) for a in data.get("actions") or []],
        )

    def current_page(self) -> int:
        """Return the number of the page these links belong to."""
        if self.pages is None:
            return 1
        return self.pages.current()

    def is_last_page(self) -> bool:
        """Return True if these links belong to the last page."""
        if self.pages is None:
            return True
        return self.pages.is_last()


def page_for_url(url: str) -> int:
    """Extract the ``page`` query parameter of an absolute request URL."""
    if not url:
        raise ValueError("empty url")
    parts = urlsplit(url)
    if not parts.scheme and not url.startswith("/"):
        raise ValueError(f"invalid URI for request: {url!r}")
    page = parse_qs(parts.query, keep_blank_values=True).get("page", [""])[0]
    if not _INTEGER.fullmatch(page):
        raise ValueError(f"invalid page number {page!r} in {url!r}")
    return int(page)