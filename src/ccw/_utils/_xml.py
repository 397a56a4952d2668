"""Namespace-agnostic, read-only view over an XML document.

Responses from the quoting service are large SOAP envelopes of which only a
handful of values matter. Rather than mirroring the wire schema, callers walk
the tree by local element names and read the few texts and attributes they
need. Missing elements resolve to an empty node so lookups never raise.
"""

import xml.etree.ElementTree as ET
from typing import Iterator, Optional, Union


def local_name(tag: str) -> str:
    """Strip the ``{namespace}`` prefix from an ElementTree tag or attribute."""
    if tag.startswith("{"):
        return tag.rsplit("}", 1)[1]
    return tag


class XmlNode:
    """A possibly-empty element in the document.

    Examples:
        ```python
        root = XmlNode.parse(response.content)
        reason = root.find("Body", "ShowQuote", "DataArea", "Show").text
        ```
    """

    __slots__ = ("_element",)

    def __init__(self, element: Optional[ET.Element] = None) -> None:
        self._element = element

    @classmethod
    def parse(cls, data: Union[str, bytes]) -> "XmlNode":
        """Parse a document and return its root.

        Raises:
            xml.etree.ElementTree.ParseError: If the document is not well formed.
        """
        return cls(ET.fromstring(data))

    def __bool__(self) -> bool:
        return self._element is not None

    def __repr__(self) -> str:
        if self._element is None:
            return "XmlNode(<empty>)"
        return f"XmlNode(<{self.name}>)"

    @property
    def name(self) -> str:
        if self._element is None:
            return ""
        return local_name(self._element.tag)

    @property
    def text(self) -> str:
        """Text directly inside the element, before its first child."""
        if self._element is None:
            return ""
        return self._element.text or ""

    @property
    def chardata(self) -> str:
        """All character data directly inside the element, stripped."""
        if self._element is None:
            return ""
        parts = [self._element.text or ""]
        parts.extend(child.tail or "" for child in self._element)
        return "".join(parts).strip()

    def attr(self, name: str) -> str:
        """Return the attribute matching ``name`` by local name, or ``""``."""
        if self._element is None:
            return ""
        for key, value in self._element.attrib.items():
            if local_name(key) == name:
                return value
        return ""

    def child(self, name: str) -> "XmlNode":
        """First direct child with the given local name."""
        if self._element is not None:
            for element in self._element:
                if local_name(element.tag) == name:
                    return XmlNode(element)
        return XmlNode()

    def children(self, name: str) -> Iterator["XmlNode"]:
        """All direct children with the given local name, in document order."""
        if self._element is None:
            return
        for element in self._element:
            if local_name(element.tag) == name:
                yield XmlNode(element)

    def find(self, *path: str) -> "XmlNode":
        """Follow ``path`` one child at a time, taking the first match per step."""
        node = self
        for name in path:
            node = node.child(name)
            if not node:
                break
        return node

    def find_text(self, *path: str) -> str:
        return self.find(*path).text
