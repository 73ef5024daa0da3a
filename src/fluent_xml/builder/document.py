"""
Document builder and the builder entry points.

Example:
    >>> from fluent_xml import xml
    >>> doc = xml('people')
    >>> for person in people:
    ...     doc.element('person').attributes(name=person.name, age=person.age)
    >>> print(doc)
    <?xml version='1.0' encoding='UTF-8'?>
    <people>
      <person age="20" name="John Doe"/>
      ...
    </people>
"""

import logging
from pathlib import Path
from typing import Any, Iterable, Optional, Union

from lxml import etree

from fluent_xml import serialization
from fluent_xml.builder.element import ContentBuilder, ElementBuilder, _LXML_ERRORS, _build_error
from fluent_xml.config import get_settings
from fluent_xml.models import Namespace, NO_NAMESPACE, OutputFormat

logger = logging.getLogger(__name__)


class DocumentBuilder(ContentBuilder):
    """
    Builder wrapping one lxml document.

    Element operations (`element`, `attribute`, `text`, ...) act on the root
    element. The output format is fixed at construction time: the explicit
    `output_format`, or the configured default (pretty, 2-space indent,
    declaration included).

    Attributes:
        tree: The wrapped `lxml.etree._ElementTree`
        output_format: Format used by `serialize()`, `save_to()` and `str()`
    """

    def __init__(self, tree: etree._ElementTree, output_format: Optional[OutputFormat] = None):
        self.tree = tree
        self.output_format = output_format if output_format is not None else get_settings().output

    @property
    def source(self) -> etree._Element:
        return self.tree.getroot()

    @property
    def document(self) -> 'DocumentBuilder':
        return self

    @property
    def root(self) -> etree._Element:
        """The root element of the document."""
        return self.tree.getroot()

    # -- FORMAT -- #

    def format(self, starting: Optional[OutputFormat] = None, **overrides: Any) -> 'DocumentBuilder':
        """
        Replace the output format of this document.

        Args:
            starting: Starting values (pretty format by default)
            **overrides: Fields of `OutputFormat` to change

        Raises:
            pydantic.ValidationError: If an override is invalid

        Example:
            >>> doc.format(indent_width=4, omit_declaration=True)
            >>> doc.format(OutputFormat.compact())
        """
        base = starting if starting is not None else OutputFormat.pretty()
        if overrides:
            base = OutputFormat(**{**base.model_dump(), **overrides})
        self.output_format = base
        return self

    # -- DOC-TYPE -- #

    def doc_type(self, public_id: Optional[str] = None, system_id: Optional[str] = None) -> 'DocumentBuilder':
        """
        Set the DOCTYPE of this document (named after the root element).

        Example:
            >>> doc.doc_type(system_id='people.dtd')
        """
        entity = f"{self.path}/#doctype"
        try:
            docinfo = self.tree.docinfo
            docinfo.public_id = public_id
            docinfo.system_url = system_id
        except _LXML_ERRORS as e:
            raise _build_error(entity, e) from e
        return self

    @property
    def doctype(self) -> Optional[str]:
        """The DOCTYPE declaration as written to the output, or None."""
        return self.tree.docinfo.doctype or None

    # -- SERIALIZATION -- #

    def serialize(self, output_format: Optional[OutputFormat] = None) -> str:
        """
        Return the document as a string in `output_format` (or this document's format).

        The DOCTYPE and any comments or processing instructions around the
        root element are written as well.
        """
        return serialization.serialize(
            self.tree,
            output_format or self.output_format,
            entity=self.path
        )

    def save_to(self, path: Union[str, Path], output_format: Optional[OutputFormat] = None) -> Path:
        """
        Write the document to `path`, truncating an existing file.

        Returns:
            The written path
        """
        return serialization.write(
            self.tree,
            path,
            output_format or self.output_format,
            entity=self.path
        )

    def __str__(self) -> str:
        return self.serialize()


def xml(
    root_name: str,
    namespace: Optional[Namespace] = None,
    *,
    namespaces: Iterable[Namespace] = (),
    output_format: Optional[OutputFormat] = None
) -> DocumentBuilder:
    """
    Create a new document and return its builder.

    Args:
        root_name: Local name of the root element
        namespace: Namespace of the root element (no namespace by default)
        namespaces: Additional namespaces declared on the root element
        output_format: Output format of the document (configured default when None)

    Raises:
        BuildError: If the root name is empty or not a valid XML name

    Example:
        >>> doc = xml('root').attribute('high_level', "it's amazing.")
        >>> with doc.element('test') as test:
        ...     test.attributes(test=False, steve=1.0).text('hello')
    """
    ns = namespace if namespace is not None else NO_NAMESPACE
    nsmap = {}
    for declared in (ns, *namespaces):
        nsmap.update(declared.nsmap)

    try:
        root = etree.Element(ns.qualify(root_name), nsmap=nsmap or None)
    except _LXML_ERRORS as e:
        raise _build_error(root_name, e) from e

    logger.debug(f"Created document with root <{root_name}> in {ns}")
    return DocumentBuilder(etree.ElementTree(root), output_format)


def mutate(tree: etree._ElementTree, output_format: Optional[OutputFormat] = None) -> DocumentBuilder:
    """
    Wrap an existing lxml document for further building.

    Raises:
        BuildError: If the document has no root element
    """
    if tree.getroot() is None:
        raise _build_error("#document", ValueError("document has no root element"))
    return DocumentBuilder(tree, output_format)


def build_element(tag: str, namespace: Optional[Namespace] = None) -> ElementBuilder:
    """
    Build a standalone element that belongs to no document.

    The element can later be added to a document with `add_content()`.

    Example:
        >>> address = build_element('address').text_element('city', 'Tokyo')
        >>> doc.element('person').add_content(address.source)
    """
    ns = namespace if namespace is not None else NO_NAMESPACE
    try:
        element = etree.Element(ns.qualify(tag), nsmap=ns.nsmap or None)
    except _LXML_ERRORS as e:
        raise _build_error(tag, e) from e
    return ElementBuilder(element)
