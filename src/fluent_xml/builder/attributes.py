"""
Scoped attribute writer for element builders.
"""

from typing import Any, TYPE_CHECKING

from lxml import etree

from fluent_xml.exceptions import BuildError
from fluent_xml.models import Namespace, NO_NAMESPACE

if TYPE_CHECKING:
    from fluent_xml.builder.element import ContentBuilder


class AttributeScope:
    """
    Short-lived helper writing attributes onto one element.

    Every value is written straight onto the owning element; the scope keeps
    no state of its own. Once its `with` block has exited the scope is closed.

    Example:
        >>> with person.attribute_scope() as attrs:
        ...     attrs['name'] = 'Hazuki Kanon'
        ...     attrs['age'] = 16
        ...     attrs.set('lang', 'ja', namespace=XML_NS)
    """

    def __init__(self, owner: 'ContentBuilder'):
        self.owner = owner
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def set(self, name: str, value: Any, namespace: Namespace = NO_NAMESPACE) -> 'AttributeScope':
        """Set one attribute on the owning element (last write wins)."""
        if self._closed:
            raise BuildError(
                f"{self.owner.path}/@{name}",
                RuntimeError("attribute scope is closed")
            )
        self.owner.attribute(name, value, namespace)
        return self

    def __setitem__(self, name: str, value: Any) -> None:
        self.set(name, value)

    def __enter__(self) -> 'AttributeScope':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self._closed = True

    def __repr__(self) -> str:
        source = self.owner.source
        attributes = ", ".join(
            f"[{etree.QName(name).localname}:{value}]" for name, value in source.attrib.items()
        )
        return f"{etree.QName(source).localname}({attributes})"
