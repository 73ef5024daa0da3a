"""
Parsing of source documents with lxml.

Documents are parsed eagerly, so malformed input surfaces as `ParseError`
at the entry point rather than later during traversal.
"""

import logging
import os
from typing import IO, Optional, Union

from lxml import etree

from fluent_xml.config import get_settings
from fluent_xml.exceptions import ParseError
from fluent_xml.models import ParserOptions

logger = logging.getLogger(__name__)

Source = Union[str, bytes, os.PathLike, IO[bytes]]


def _describe(source: Source) -> str:
    if isinstance(source, bytes):
        return "<bytes>"
    if isinstance(source, (str, os.PathLike)):
        return str(source)
    return str(getattr(source, 'name', '<stream>'))


def _checked(tree: etree._ElementTree, description: str) -> etree._ElementTree:
    # recover=True can produce a tree without a root element
    if tree.getroot() is None:
        cause = ValueError("document has no root element")
        logger.error(f"Failed to parse {description}: {cause}")
        raise ParseError(description, cause)
    return tree


def parse(source: Source, options: Optional[ParserOptions] = None) -> etree._ElementTree:
    """
    Parse a document from a file path, bytes or a binary file object.

    Args:
        source: Path (str or os.PathLike), raw bytes, or an object with read()
        options: Parser options (configured default when None)

    Returns:
        The parsed lxml document

    Raises:
        ParseError: If the source cannot be read or is not well-formed

    Example:
        >>> tree = parse('people.xml')
        >>> tree.getroot().tag
        'people'
    """
    opts = options if options is not None else get_settings().parser
    description = _describe(source)
    parser = opts.create_parser()

    try:
        if isinstance(source, bytes):
            root = etree.fromstring(source, parser)
            tree = root.getroottree() if root is not None else etree.ElementTree()
        elif isinstance(source, os.PathLike):
            tree = etree.parse(os.fspath(source), parser)
        else:
            tree = etree.parse(source, parser)
    except (etree.ParseError, OSError) as e:
        logger.error(f"Failed to parse {description}: {e}")
        raise ParseError(description, e) from e

    logger.debug(f"Parsed document from {description}")
    return _checked(tree, description)


def parse_string(text: str, options: Optional[ParserOptions] = None) -> etree._ElementTree:
    """
    Parse a document from a string.

    Any encoding named in the XML declaration is ignored: the string is
    already decoded, so it is handed to lxml as UTF-8.

    Raises:
        ParseError: If the text is not well-formed
    """
    opts = options if options is not None else get_settings().parser
    parser = opts.create_parser(encoding='utf-8')

    try:
        root = etree.fromstring(text.encode('utf-8'), parser)
    except (etree.ParseError, ValueError) as e:
        logger.error(f"Failed to parse <string>: {e}")
        raise ParseError("<string>", e) from e

    if root is None:
        return _checked(etree.ElementTree(), "<string>")

    logger.debug(f"Parsed document from string ({len(text)} characters)")
    return root.getroottree()
