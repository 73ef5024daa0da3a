"""
Element travelers: typed lookups over an already parsed tree.

Single lookups (`element`, `attribute`) follow a present/missing contract:
the caller must say what happens when nothing matches, so a missing node is
never silently turned into None.

    >>> doc.element('person', if_missing=throw_missing('Missing person element!'))
    >>> doc.attribute('age', if_present=AttributeView.as_int, if_missing=lambda: 0)

Multi lookups (`elements`, `attributes`, `comments`, `texts`) are
generators over the direct children of the scope, in document order.
"""

import weakref
from typing import Any, Callable, Iterable, Iterator, Optional, TypeVar, Union

from lxml import etree

from fluent_xml import serialization
from fluent_xml.models import Namespace, NO_NAMESPACE, OutputFormat
from fluent_xml.traversal.attribute import AttributeView
from fluent_xml.traversal.query import CompiledQuery
from fluent_xml.types import NodeKind
from fluent_xml.values import stringify

R = TypeVar('R')

ElementMatch = Union[None, str, Iterable[str], Callable[['ElementTraveler'], bool], CompiledQuery]
AttributeMatch = Union[None, str, Iterable[str], Callable[[AttributeView], bool], CompiledQuery]


def _name_matches(qualified_name: str, names: frozenset, namespace: Namespace) -> bool:
    qname = etree.QName(qualified_name)
    return qname.localname in names and (qname.namespace or "") == namespace.uri


def _filter(match, namespace: Namespace, key: Callable[[Any], str]) -> Callable[[Any], bool]:
    """Turn a name / names / predicate match into a predicate over wrapped nodes."""
    if match is None:
        return lambda node: True
    if isinstance(match, str):
        names = frozenset([match])
    elif callable(match):
        return match
    else:
        names = frozenset(match)
    return lambda node: _name_matches(key(node), names, namespace)


class Traveler:
    """Lookups shared by `DocumentTraveler` and `ElementTraveler`."""

    source: etree._Element

    # -- IDENTITY -- #

    @property
    def name(self) -> str:
        """Local name of the scope element."""
        return etree.QName(self.source).localname

    @property
    def namespace(self) -> Namespace:
        return Namespace.of_element(self.source)

    @property
    def text(self) -> str:
        """Text before the first child of the scope element ('' when there is none)."""
        return self.source.text or ""

    @property
    def full_text(self) -> str:
        """All text content of the scope element and its descendants."""
        return ''.join(self.source.itertext())

    def _wrap(self, element: etree._Element) -> 'ElementTraveler':
        return ElementTraveler(element, parent=self)

    def _child_elements(self) -> Iterator[etree._Element]:
        return self.source.iterchildren(tag=etree.Element)

    # -- ELEMENT -- #

    def element(
        self,
        name_or_query: Union[str, CompiledQuery],
        namespace: Namespace = NO_NAMESPACE,
        *,
        if_missing: Callable[[], R],
        if_present: Optional[Callable[['ElementTraveler'], R]] = None
    ) -> Union['ElementTraveler', R]:
        """
        Look up the first direct child with the given name and namespace.

        With a `CompiledQuery`, the first element result of the query is used
        instead (and `namespace` is ignored).

        Args:
            name_or_query: Local name of the child, or a compiled query
            namespace: Namespace of the child (no namespace by default)
            if_missing: Called without arguments when nothing matches; its
                result is returned
            if_present: Applied to the matching traveler; the traveler itself
                is returned when omitted

        Example:
            >>> name = doc.element(
            ...     'person',
            ...     if_present=lambda person: person.attribute_map()['name'],
            ...     if_missing=lambda: 'anonymous'
            ... )
        """
        if isinstance(name_or_query, CompiledQuery):
            found = name_or_query.evaluate_first(self, kind=NodeKind.ELEMENT)
        else:
            names = frozenset([name_or_query])
            found = next(
                (self._wrap(child) for child in self._child_elements()
                 if _name_matches(child.tag, names, namespace)),
                None
            )

        if found is None:
            return if_missing()
        return if_present(found) if if_present is not None else found

    def elements(self, match: ElementMatch = None, namespace: Namespace = NO_NAMESPACE) -> Iterator['ElementTraveler']:
        """
        Iterate over matching direct child elements, in document order.

        Args:
            match: None for every child, a local name, an iterable of local
                names, a predicate over `ElementTraveler`, or a compiled query
            namespace: Namespace the names must be in (ignored for predicates
                and queries)

        Example:
            >>> [p.attribute_map()['name'] for p in doc.elements('person')]
            >>> list(doc.elements(lambda e: e.name.startswith('sub')))
        """
        if isinstance(match, CompiledQuery):
            yield from match.evaluate_all(self, kind=NodeKind.ELEMENT)
            return

        accept = _filter(match, namespace, key=lambda traveler: traveler.source.tag)
        for child in self._child_elements():
            traveler = self._wrap(child)
            if accept(traveler):
                yield traveler

    # -- ATTRIBUTE -- #

    def attribute(
        self,
        name_or_query: Union[str, CompiledQuery],
        namespace: Namespace = NO_NAMESPACE,
        *,
        if_missing: Callable[[], R],
        if_present: Optional[Callable[[AttributeView], R]] = None,
        value: Any = None
    ) -> Union[AttributeView, R]:
        """
        Look up an attribute of the scope element.

        Args:
            name_or_query: Local name of the attribute, or a compiled query
            namespace: Namespace of the attribute (no namespace by default)
            if_missing: Called without arguments when nothing matches
            if_present: Applied to the matching `AttributeView`; the view
                itself is returned when omitted
            value: When given, the attribute only matches if its value equals
                the stringified `value`

        Example:
            >>> doc.attribute('sweet', value=False, if_missing=lambda: None)
        """
        if isinstance(name_or_query, CompiledQuery):
            found = name_or_query.evaluate_first(self, kind=NodeKind.ATTRIBUTE)
        else:
            qualified = namespace.qualify(name_or_query)
            found = AttributeView.of(self.source, qualified) if qualified in self.source.attrib else None

        if found is not None and value is not None and found.value != stringify(value):
            found = None

        if found is None:
            return if_missing()
        return if_present(found) if if_present is not None else found

    def attributes(self, match: AttributeMatch = None, namespace: Namespace = NO_NAMESPACE) -> Iterator[AttributeView]:
        """
        Iterate over matching attributes of the scope element.

        `match` works like in `elements()`; predicates receive `AttributeView`.
        """
        if isinstance(match, CompiledQuery):
            yield from match.evaluate_all(self, kind=NodeKind.ATTRIBUTE)
            return

        accept = _filter(match, namespace, key=lambda view: view.qualified_name)
        for qualified_name in self.source.attrib.keys():
            view = AttributeView.of(self.source, qualified_name)
            if accept(view):
                yield view

    def attribute_map(self) -> dict:
        """Attributes of the scope element as a name → value dict (Clark notation for namespaced names)."""
        return dict(self.source.attrib)

    # -- COMMENTS / TEXT -- #

    def comments(self, predicate: Optional[Callable[[str], bool]] = None) -> Iterator[str]:
        """Iterate over the text of the direct child comments."""
        for comment in self.source.iterchildren(tag=etree.Comment):
            text = comment.text or ""
            if predicate is None or predicate(text):
                yield text

    def texts(self, predicate: Optional[Callable[[str], bool]] = None) -> Iterator[str]:
        """
        Iterate over the text segments directly inside the scope element.

        These are the text before the first child and the text after each
        child, including whitespace-only segments.
        """
        segments = [self.source.text]
        segments.extend(child.tail for child in self.source)
        for segment in segments:
            if segment and (predicate is None or predicate(segment)):
                yield segment

    # -- MISC -- #

    def match(self, query: CompiledQuery) -> list:
        """Every result of `query` evaluated against this scope."""
        return query.evaluate_all(self)

    def serialize(self, output_format: Optional[OutputFormat] = None) -> str:
        """Serialize the scope element (no XML declaration)."""
        return serialization.serialize(
            self.source,
            output_format or OutputFormat.pretty(),
            declaration=False,
            entity=self.name
        )

    def __str__(self) -> str:
        return self.serialize()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        return None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Traveler):
            return NotImplemented
        return type(self) is type(other) and self.source is other.source

    def __hash__(self) -> int:
        return hash(self.source)


class ElementTraveler(Traveler):
    """
    Traveler wrapping one element of a parsed tree.

    Args:
        source: The wrapped element
        parent: Traveler of the parent scope, kept as a weak reference
    """

    def __init__(self, source: etree._Element, parent: Optional[Traveler] = None):
        self.source = source
        self._parent_ref = weakref.ref(parent) if parent is not None else None

    @property
    def parent(self) -> Optional[Traveler]:
        """Traveler of the parent element, or None at the top of the tree."""
        if self._parent_ref is not None:
            parent = self._parent_ref()
            if parent is not None:
                return parent

        parent_element = self.source.getparent()
        if parent_element is None:
            return None
        return ElementTraveler(parent_element)

    def __repr__(self) -> str:
        return f"<ElementTraveler {self.source.tag}>"
