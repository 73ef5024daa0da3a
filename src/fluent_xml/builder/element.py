"""
Element builders: chained construction of lxml elements.

`ContentBuilder` holds every operation shared by the document and element
builders. All operations act on `source`, the wrapped lxml element, and
return a builder so calls can be chained:

    >>> doc.element('person').attribute('name', 'Mary Sue').text('hello').end()

Every error raised by lxml is re-raised as `BuildError` naming the path of
the node that was being created.
"""

import logging
import weakref
from typing import Any, Mapping, Optional, TYPE_CHECKING

from lxml import etree

from fluent_xml import serialization
from fluent_xml.builder.attributes import AttributeScope
from fluent_xml.exceptions import BuildError
from fluent_xml.models import Namespace, NO_NAMESPACE, OutputFormat
from fluent_xml.values import stringify

if TYPE_CHECKING:
    from fluent_xml.builder.document import DocumentBuilder

logger = logging.getLogger(__name__)

_LXML_ERRORS = (ValueError, TypeError, etree.LxmlError)


def _build_error(entity: str, cause: BaseException) -> BuildError:
    logger.error(f"Failed to create '{entity}': {cause}")
    return BuildError(entity, cause)


class ContentBuilder:
    """Operations shared by `DocumentBuilder` and `ElementBuilder`."""

    source: etree._Element
    document: Optional['DocumentBuilder']

    # -- IDENTITY -- #

    @property
    def name(self) -> str:
        """Local name of the wrapped element."""
        return etree.QName(self.source).localname

    @property
    def namespace(self) -> Namespace:
        return Namespace.of_element(self.source)

    @property
    def path(self) -> str:
        """Slash separated local names from the tree root down to this element."""
        names = [etree.QName(ancestor).localname for ancestor in self.source.iterancestors()]
        names.reverse()
        names.append(self.name)
        return "/".join(names)

    # -- ATTRIBUTES -- #

    def attribute(self, name: str, value: Any, namespace: Namespace = NO_NAMESPACE) -> 'ContentBuilder':
        """
        Set an attribute on this element.

        The value is converted with `stringify` (so `False` becomes 'false').
        Setting an existing attribute replaces its value.

        A prefixed namespace that is not declared on this element or one of
        its ancestors gets a generated prefix from lxml; declare prefixes on
        the root with `xml(..., namespaces=[...])` to control them.
        """
        entity = f"{self.path}/@{name}"
        try:
            self.source.set(namespace.qualify(name), stringify(value))
        except _LXML_ERRORS as e:
            raise _build_error(entity, e) from e
        return self

    def attributes(self, mapping: Optional[Mapping[str, Any]] = None, **values: Any) -> 'ContentBuilder':
        """
        Set several attributes at once.

        Example:
            >>> person.attributes(name='John Doe', age=20)
            >>> person.attributes({'xml-lang': 'en'})
        """
        merged = dict(mapping or {})
        merged.update(values)
        for name, value in merged.items():
            self.attribute(name, value)
        return self

    def attribute_scope(self) -> AttributeScope:
        """Return an `AttributeScope` writing onto this element."""
        return AttributeScope(self)

    # -- ELEMENTS -- #

    def _create(self, tag: str, namespace: Optional[Namespace]) -> etree._Element:
        ns = self.namespace if namespace is None else namespace
        if ns.is_empty and self.source.nsmap.get(None):
            # lxml cannot undeclare a default namespace (no xmlns=""), so the
            # child would be read back in the parent's namespace
            raise _build_error(
                f"{self.path}/{tag}",
                ValueError(
                    f"an element without namespace cannot be written inside "
                    f"the default namespace '{self.source.nsmap[None]}'"
                )
            )
        nsmap = None
        if not ns.is_empty and self.source.nsmap.get(ns.prefix or None) != ns.uri:
            nsmap = ns.nsmap
        try:
            return self.source.makeelement(ns.qualify(tag), nsmap=nsmap)
        except _LXML_ERRORS as e:
            raise _build_error(f"{self.path}/{tag}", e) from e

    def element(self, tag: str, namespace: Optional[Namespace] = None) -> 'ElementBuilder':
        """
        Create a child element and return its builder.

        Args:
            tag: Local name of the new element
            namespace: Namespace of the new element (defaults to this element's)

        Returns:
            Builder of the new child; use `end()` to get back to this builder

        Raises:
            BuildError: If the tag is invalid, or if `namespace` is `NO_NAMESPACE`
                while a default namespace is in scope (lxml cannot write
                xmlns="" to undeclare it)

        Example:
            >>> with doc.element('person') as person:
            ...     person.attribute('name', 'Mary Sue')
        """
        return ElementBuilder(self._create(tag, namespace), parent=self, document=self.document)

    def text_element(self, tag: str, content: Any, namespace: Optional[Namespace] = None) -> 'ContentBuilder':
        """Create a child element containing only `content` as text; returns this builder."""
        self.element(tag, namespace).text(content)
        return self

    def cdata_element(self, tag: str, content: Any, namespace: Optional[Namespace] = None) -> 'ContentBuilder':
        """Create a child element containing only a CDATA section; returns this builder."""
        self.element(tag, namespace).cdata(content)
        return self

    # -- TEXT / CDATA / COMMENT -- #

    def text(self, content: Any) -> 'ContentBuilder':
        """Append a text node after the current last content of this element."""
        entity = f"{self.path}/#text"
        try:
            value = stringify(content)
            if len(self.source):
                last = self.source[-1]
                last.tail = (last.tail or "") + value
            else:
                self.source.text = (self.source.text or "") + value
        except _LXML_ERRORS as e:
            raise _build_error(entity, e) from e
        return self

    def cdata(self, content: Any) -> 'ContentBuilder':
        """
        Add a CDATA section.

        lxml keeps CDATA only as the first content of an element, so this
        fails when the element already has text or children.
        """
        entity = f"{self.path}/#cdata"
        if self.source.text or len(self.source):
            raise _build_error(
                entity,
                ValueError("CDATA can only be added to an element without content")
            )
        try:
            self.source.text = etree.CDATA(stringify(content))
        except _LXML_ERRORS as e:
            raise _build_error(entity, e) from e
        return self

    def comment(self, content: Any) -> 'ContentBuilder':
        """Append a comment node."""
        entity = f"{self.path}/#comment"
        try:
            self.source.append(etree.Comment(stringify(content)))
        except _LXML_ERRORS as e:
            raise _build_error(entity, e) from e
        return self

    def add_content(self, node: etree._Element) -> 'ContentBuilder':
        """Append an existing lxml node (element, comment, processing instruction)."""
        entity = f"{self.path}/#content"
        try:
            self.source.append(node)
        except _LXML_ERRORS as e:
            raise _build_error(entity, e) from e
        return self

    # -- MISC -- #

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        return None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ContentBuilder):
            return NotImplemented
        return self.source is other.source

    def __hash__(self) -> int:
        return hash(self.source)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} path='{self.path}'>"


class ElementBuilder(ContentBuilder):
    """
    Builder wrapping one lxml element.

    On construction the element is appended to the parent's element (unless
    it is already a child of it). The parent is kept as a weak reference; if
    the parent builder has been garbage collected, `parent` rebuilds a
    wrapper around the parent element.

    Args:
        source: The element to wrap
        parent: Builder of the parent element (None for standalone elements)
        document: Owning document builder (taken from `parent` when omitted)
    """

    def __init__(
        self,
        source: etree._Element,
        parent: Optional[ContentBuilder] = None,
        document: Optional['DocumentBuilder'] = None
    ):
        self.source = source
        self.document = document if document is not None else getattr(parent, 'document', None)
        self._parent_ref = weakref.ref(parent) if parent is not None else None

        if parent is not None and source.getparent() is not parent.source:
            try:
                parent.source.append(source)
            except _LXML_ERRORS as e:
                raise _build_error(f"{parent.path}/{etree.QName(source).localname}", e) from e

    @property
    def parent(self) -> Optional[ContentBuilder]:
        """Builder of the parent element, or None for a detached/standalone element."""
        if self._parent_ref is not None:
            parent = self._parent_ref()
            if parent is not None and self.source.getparent() is parent.source:
                return parent

        parent_element = self.source.getparent()
        if parent_element is None:
            return None
        if self.document is not None and parent_element is self.document.source:
            return self.document
        return ElementBuilder(parent_element, document=self.document)

    def end(self) -> ContentBuilder:
        """
        Return the parent builder, closing this element in a fluent chain.

        Raises:
            BuildError: If this element has no parent
        """
        parent = self.parent
        if parent is None:
            raise _build_error(self.path, ValueError("element has no parent to return to"))
        return parent

    def detach(self) -> etree._Element:
        """
        Remove the element from its parent and return it.

        Text following the element stays in the parent.
        """
        element = self.source
        parent = element.getparent()
        if parent is not None:
            tail = element.tail
            if tail:
                previous = element.getprevious()
                if previous is not None:
                    previous.tail = (previous.tail or "") + tail
                else:
                    parent.text = (parent.text or "") + tail
            element.tail = None
            parent.remove(element)
        self._parent_ref = None
        return element

    def serialize(self, output_format: Optional[OutputFormat] = None) -> str:
        """Serialize this element (no XML declaration)."""
        return serialization.serialize(
            self.source,
            output_format or OutputFormat.pretty(),
            declaration=False,
            entity=self.path
        )

    def __str__(self) -> str:
        return self.serialize()
