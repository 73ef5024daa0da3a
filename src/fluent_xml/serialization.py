"""
Serialization of lxml trees according to an `OutputFormat`.

All formatting work is done by lxml (`etree.indent`, `etree.tostring`).
This module only maps `OutputFormat` onto lxml's options and applies two
output rules on a private copy of the tree:

1. Attributes are written in alphabetical order (local name, then namespace)
2. Empty elements are expanded to <a></a> when requested

Whole documents are passed in as `_ElementTree`, so lxml also writes the
DOCTYPE and the comments and processing instructions around the root.

The tree handed in is never modified.
"""

import copy
import logging
from pathlib import Path
from typing import Optional, Union

from lxml import etree

from fluent_xml.config import get_settings
from fluent_xml.exceptions import BuildError
from fluent_xml.models import OutputFormat

logger = logging.getLogger(__name__)

Node = Union[etree._Element, etree._ElementTree]


def resolve_format(output_format: Optional[OutputFormat] = None) -> OutputFormat:
    """Return `output_format`, or the configured default when it is None."""
    if output_format is not None:
        return output_format
    return get_settings().output


def _root_of(node: Node) -> etree._Element:
    if isinstance(node, etree._ElementTree):
        return node.getroot()
    return node


def _attribute_sort_key(name: str):
    qname = etree.QName(name)
    return qname.localname, qname.namespace or ""


def _sort_attributes(element: etree._Element) -> None:
    if len(element.attrib) < 2:
        return
    items = sorted(element.attrib.items(), key=lambda item: _attribute_sort_key(item[0]))
    element.attrib.clear()
    for name, value in items:
        element.set(name, value)


def _prepare(node: Node, output_format: OutputFormat) -> Node:
    """Copy `node` and apply the attribute/empty-element/indent rules to the copy."""
    clone = copy.deepcopy(node)
    root = _root_of(clone)

    for element in root.iter(etree.Element):
        _sort_attributes(element)
        if output_format.expand_empty_elements and element.text is None and len(element) == 0:
            element.text = ""

    if output_format.indent:
        etree.indent(root, space=" " * output_format.indent_width)

    return clone


def serialize_bytes(
    node: Node,
    output_format: Optional[OutputFormat] = None,
    *,
    declaration: bool = True,
    entity: Optional[str] = None
) -> bytes:
    """
    Serialize an element or a whole document to bytes.

    Args:
        node: Element (subtree only) or `_ElementTree` (complete document,
            including DOCTYPE and top-level comments/processing instructions)
        output_format: Options to use (configured default when None)
        declaration: Whether an XML declaration may be written at all
            (element-level output never has one)
        entity: Description used in error messages (defaults to the tag name)

    Returns:
        Encoded XML in `output_format.encoding`

    Raises:
        BuildError: If lxml fails to serialize the tree
    """
    fmt = resolve_format(output_format)

    try:
        prepared = _prepare(node, fmt)
        kwargs = {
            'encoding': fmt.encoding,
            'pretty_print': fmt.indent,
            'with_tail': False,
        }

        if not declaration or fmt.omit_declaration:
            return etree.tostring(prepared, xml_declaration=False, **kwargs)

        if fmt.omit_encoding:
            # lxml always writes the encoding into its own declaration;
            # OutputFormat only allows this for UTF-8 and ASCII
            header = "<?xml version='1.0'?>\n".encode(fmt.encoding)
            return header + etree.tostring(prepared, xml_declaration=False, **kwargs)

        return etree.tostring(prepared, xml_declaration=True, **kwargs)
    except (etree.LxmlError, ValueError, TypeError, LookupError) as e:
        where = entity or etree.QName(_root_of(node)).localname
        logger.error(f"Serialization of '{where}' failed: {e}")
        raise BuildError(where, e) from e


def serialize(
    node: Node,
    output_format: Optional[OutputFormat] = None,
    *,
    declaration: bool = True,
    entity: Optional[str] = None
) -> str:
    """Serialize to a string; see `serialize_bytes` for the arguments."""
    fmt = resolve_format(output_format)
    data = serialize_bytes(node, fmt, declaration=declaration, entity=entity)
    return data.decode(fmt.encoding)


def write(
    node: Node,
    path: Union[str, Path],
    output_format: Optional[OutputFormat] = None,
    *,
    entity: Optional[str] = None
) -> Path:
    """
    Serialize an element or document as a complete document into `path`.

    Existing files are truncated. Parent directories must exist.

    Returns:
        The path that was written
    """
    target = Path(path)
    data = serialize_bytes(node, output_format, entity=entity)
    target.write_bytes(data)
    logger.debug(f"Saved {len(data)} bytes to {target}")
    return target
