"""
Document traveler and the traversal entry points.

Example:
    >>> doc = traverse('people.xml')
    >>> for person in doc.elements('person'):
    ...     print(person.attribute('name', if_present=lambda a: a.value, if_missing=throw_missing('nameless person')))
"""

import logging
from typing import Callable, NoReturn, Optional, Union

from lxml import etree

from fluent_xml import serialization
from fluent_xml.exceptions import NotFoundError
from fluent_xml.models import OutputFormat, ParserOptions
from fluent_xml.traversal.element import ElementTraveler, Traveler
from fluent_xml.traversal.parser import Source, _checked, parse, parse_string

logger = logging.getLogger(__name__)


class DocumentTraveler(Traveler):
    """
    Traveler wrapping a parsed lxml document.

    Lookups act on the root element.

    Attributes:
        tree: The wrapped `lxml.etree._ElementTree`
    """

    def __init__(self, tree: etree._ElementTree):
        self.tree = tree

    @property
    def source(self) -> etree._Element:
        return self.tree.getroot()

    @property
    def root(self) -> ElementTraveler:
        """The root element as an `ElementTraveler` (its parent is this document)."""
        return ElementTraveler(self.source, parent=self)

    @property
    def parent(self) -> None:
        return None

    @property
    def doc_type(self) -> Optional[str]:
        """DOCTYPE declaration of the parsed document, or None."""
        return self.tree.docinfo.doctype or None

    @property
    def encoding(self) -> Optional[str]:
        return self.tree.docinfo.encoding

    @property
    def url(self) -> Optional[str]:
        """Location the document was parsed from, when known."""
        return self.tree.docinfo.URL

    def serialize(self, output_format: Optional[OutputFormat] = None) -> str:
        """Serialize the whole document: declaration, DOCTYPE, top-level comments and PIs."""
        return serialization.serialize(
            self.tree,
            output_format,
            entity=self.name
        )

    def __repr__(self) -> str:
        return f"<DocumentTraveler root={self.source.tag}>"


def traverse(
    source: Union[Source, etree._ElementTree, etree._Element],
    options: Optional[ParserOptions] = None
) -> Traveler:
    """
    Start traversing a document.

    Args:
        source: An lxml document or element (wrapped as is), or a file path,
            bytes or binary file object to parse
        options: Parser options (configured default when None)

    Returns:
        `DocumentTraveler` for documents and parsed sources,
        `ElementTraveler` for a bare element

    Raises:
        ParseError: If the source cannot be read, is not well-formed or has
            no root element
    """
    if isinstance(source, etree._ElementTree):
        return DocumentTraveler(_checked(source, "<tree>"))
    if isinstance(source, etree._Element):
        return ElementTraveler(source)
    return DocumentTraveler(parse(source, options))


def from_string(text: str, options: Optional[ParserOptions] = None) -> DocumentTraveler:
    """
    Parse `text` and start traversing it.

    Raises:
        ParseError: If the text is not well-formed

    Example:
        >>> doc = from_string('<people><person name="John Doe"/></people>')
        >>> doc.element('person', if_missing=throw_missing('no person')).name
        'person'
    """
    return DocumentTraveler(parse_string(text, options))


def throw_missing(message: str) -> Callable[[], NoReturn]:
    """
    Return an `if_missing` callback raising `NotFoundError(message)`.

    Example:
        >>> doc.element('person', if_missing=throw_missing('Missing person element!'))
    """
    def _raise() -> NoReturn:
        logger.debug(f"Required node missing: {message}")
        raise NotFoundError(message)

    return _raise
