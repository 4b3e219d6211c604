"""Mutable page region the weather block renders into.

A region wraps one BeautifulSoup element. The host hands the region over and
the block owns its content until a terminal state has been rendered.
"""
from __future__ import annotations

from typing import List, Optional

from bs4 import BeautifulSoup, NavigableString, Tag


class Region:
    def __init__(self, element: Tag) -> None:
        self.element = element

    @classmethod
    def from_html(cls, markup: str) -> "Region":
        """Parse a block fragment.

        A fragment with a single top-level element becomes that element;
        anything else is wrapped in a ``<div>``.
        """
        soup = BeautifulSoup(markup, "html.parser")
        elements = [node for node in soup.contents if isinstance(node, Tag)]
        stray_text = any(
            isinstance(node, NavigableString) and node.strip() for node in soup.contents
        )
        if len(elements) == 1 and not stray_text:
            return cls(elements[0])
        wrapper = soup.new_tag("div")
        for node in list(soup.contents):
            wrapper.append(node.extract())
        soup.append(wrapper)
        return cls(wrapper)

    def paragraph_texts(self) -> List[str]:
        return [paragraph.get_text() for paragraph in self.element.find_all("p")]

    def replace_content(self, markup: str) -> None:
        self.element.clear()
        fragment = BeautifulSoup(markup, "html.parser")
        for node in list(fragment.contents):
            self.element.append(node.extract())

    @property
    def inner_html(self) -> str:
        return self.element.decode_contents()

    def __str__(self) -> str:
        return str(self.element)


def extract_city(region: Region) -> Optional[str]:
    """Return the trimmed text of the region's second paragraph, if any."""
    paragraphs = region.paragraph_texts()
    if len(paragraphs) < 2:
        return None
    city = paragraphs[1].strip()
    return city or None


__all__ = ["Region", "extract_city"]
