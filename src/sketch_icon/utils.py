"""Utility functions for loading SVG markup and walking its elements."""

from enum import Enum
from pathlib import Path
from typing import Iterator
from xml.etree import ElementTree as ET

from .errors import DocumentParseError, MissingRootError

# SVG namespace mappings
SVG_NAMESPACES = {
    "svg": "http://www.w3.org/2000/svg",
}

DRAWING_ROOT = "svg"
PATH_ELEMENT = "path"

# Shape elements that must be converted to paths before export
UNSUPPORTED_ELEMENTS = frozenset(
    [
        "rect",
        "circle",
        "ellipse",
        "line",
        "polyline",
    ]
)


class NodeKind(Enum):
    """How the walker treats an element."""

    PATH = "path"
    CONTAINER = "container"
    UNSUPPORTED = "unsupported"


def parse_svg_string(text: str) -> ET.Element:
    """Parse SVG markup and return the document element.

    Args:
        text: Raw SVG markup.

    Returns:
        Document element of the parsed markup.

    Raises:
        DocumentParseError: If the markup is not well-formed XML.
    """
    try:
        return ET.fromstring(text)
    except ET.ParseError as e:
        raise DocumentParseError(f"input is not valid svg markup: {e}") from e


def parse_svg(file_path: Path) -> ET.Element:
    """Read an SVG file and return the document element.

    Raises:
        FileNotFoundError: If the file does not exist.
        DocumentParseError: If the file is not valid XML.
    """
    return parse_svg_string(Path(file_path).read_text(encoding="utf-8"))


def get_local_name(tag: str) -> str:
    """Extract local name from a namespaced tag.

    Args:
        tag: Full tag name, possibly with namespace.

    Returns:
        Local name without namespace prefix.

    Example:
        >>> get_local_name("{http://www.w3.org/2000/svg}path")
        'path'
    """
    if tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag


def iter_preorder(element: ET.Element) -> Iterator[ET.Element]:
    """Iterate over an element and its descendants in document order."""
    stack = [element]
    while stack:
        elem = stack.pop()
        yield elem
        stack.extend(reversed(list(elem)))


def find_drawing_root(tree: ET.Element) -> ET.Element:
    """Find the first <svg> element in depth-first pre-order.

    Args:
        tree: Document element to search, included in the search.

    Returns:
        The drawing-root element.

    Raises:
        MissingRootError: If no <svg> element exists.
    """
    for elem in iter_preorder(tree):
        if get_local_name(elem.tag) == DRAWING_ROOT:
            return elem
    raise MissingRootError("input svg does not contain an <svg> element")


def classify_element(element: ET.Element) -> NodeKind:
    """Classify an element for the path walker.

    Args:
        element: An XML element.

    Returns:
        NodeKind of the element.
    """
    local_name = get_local_name(element.tag)
    if local_name == PATH_ELEMENT:
        return NodeKind.PATH
    if local_name in UNSUPPORTED_ELEMENTS:
        return NodeKind.UNSUPPORTED
    return NodeKind.CONTAINER
