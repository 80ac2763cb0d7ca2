"""
Read-only document tree used by the extraction engine.

The engine only needs three capabilities from a rendered page: query by CSS
selector, read an attribute, and read text content. `Document` and `Element`
describe that surface; `SoupDocument` implements it on top of BeautifulSoup
with the lxml parser and soupsieve for selectors.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

import soupsieve
from bs4 import BeautifulSoup, Tag

from jobsweep.errors import SelectorError


class Element(ABC):
    """A node in the rendered document. Never mutated by the engine."""

    @abstractmethod
    def select(self, selector: str) -> List["Element"]:
        """All descendants matching selector, in document order."""
        raise NotImplementedError

    @abstractmethod
    def select_one(self, selector: str) -> Optional["Element"]:
        """First descendant matching selector, or None."""
        raise NotImplementedError

    @abstractmethod
    def closest(self, selector: str) -> Optional["Element"]:
        """This element or its nearest ancestor matching selector, or None."""
        raise NotImplementedError

    @abstractmethod
    def get_attribute(self, name: str) -> Optional[str]:
        raise NotImplementedError

    @property
    @abstractmethod
    def tag_name(self) -> str:
        raise NotImplementedError

    @property
    @abstractmethod
    def text_content(self) -> str:
        """Concatenated text of the element and all its descendants, untrimmed."""
        raise NotImplementedError


class Document(ABC):
    """A fully rendered page."""

    @abstractmethod
    def select(self, selector: str) -> List[Element]:
        raise NotImplementedError

    @property
    @abstractmethod
    def title(self) -> str:
        raise NotImplementedError


# ----------------------------- BeautifulSoup backend -----------------------------

def _compile(selector: str) -> soupsieve.SoupSieve:
    try:
        return soupsieve.compile(selector)
    except soupsieve.SelectorSyntaxError as e:
        raise SelectorError(selector, str(e).splitlines()[0]) from e
    except (NotImplementedError, ValueError, TypeError) as e:
        raise SelectorError(selector, str(e)) from e


class SoupElement(Element):
    """Element wrapping a bs4 Tag."""

    __slots__ = ("_tag",)

    def __init__(self, tag: Tag):
        self._tag = tag

    @property
    def tag(self) -> Tag:
        return self._tag

    def select(self, selector: str) -> List[Element]:
        return [SoupElement(t) for t in _compile(selector).select(self._tag)]

    def select_one(self, selector: str) -> Optional[Element]:
        found = _compile(selector).select_one(self._tag)
        return SoupElement(found) if found is not None else None

    def closest(self, selector: str) -> Optional[Element]:
        found = _compile(selector).closest(self._tag)
        return SoupElement(found) if found is not None else None

    def get_attribute(self, name: str) -> Optional[str]:
        value = self._tag.get(name)
        if value is None:
            return None
        # bs4 splits multi-valued attributes such as class into lists
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    @property
    def tag_name(self) -> str:
        return self._tag.name or ""

    @property
    def text_content(self) -> str:
        return self._tag.get_text()

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SoupElement) and other._tag is self._tag

    def __hash__(self) -> int:
        return id(self._tag)

    def __repr__(self) -> str:
        return f"<SoupElement {self.tag_name}>"


class SoupDocument(Document):
    """Document parsed from an HTML snapshot."""

    def __init__(self, html: str, parser: str = "lxml"):
        self.soup = BeautifulSoup(html or "", parser)

    def select(self, selector: str) -> List[Element]:
        return [SoupElement(t) for t in _compile(selector).select(self.soup)]

    @property
    def title(self) -> str:
        if self.soup.title and self.soup.title.string:
            return self.soup.title.string.strip()
        return ""
