"""
Read-only view of one attribute of a parsed element.

lxml exposes attributes as a name → value mapping on the element; this view
bundles one entry with its namespace and owning element.
"""

from dataclasses import dataclass

from lxml import etree

from fluent_xml.models import Namespace, NO_NAMESPACE


@dataclass(frozen=True)
class AttributeView:
    """A single attribute: local name, value, namespace and owning element."""
    name: str
    value: str
    namespace: Namespace
    element: etree._Element

    @classmethod
    def of(cls, element: etree._Element, qualified_name: str) -> 'AttributeView':
        """Create the view of attribute `qualified_name` (Clark notation) on `element`."""
        qname = etree.QName(qualified_name)
        namespace = NO_NAMESPACE
        if qname.namespace:
            prefix = next(
                (p for p, uri in element.nsmap.items() if uri == qname.namespace and p),
                ""
            )
            namespace = Namespace(prefix=prefix, uri=qname.namespace)
        return cls(
            name=qname.localname,
            value=element.get(qualified_name, ""),
            namespace=namespace,
            element=element
        )

    @property
    def qualified_name(self) -> str:
        """Name in Clark notation ('{uri}local' or 'local')."""
        return self.namespace.qualify(self.name)

    def as_int(self) -> int:
        return int(self.value)

    def as_float(self) -> float:
        return float(self.value)

    def as_bool(self) -> bool:
        """
        Interpret the value as an XML boolean ('true'/'1' or 'false'/'0').

        Raises:
            ValueError: For any other value
        """
        value = self.value.strip()
        if value in ("true", "1"):
            return True
        if value in ("false", "0"):
            return False
        raise ValueError(f"Attribute '{self.name}' is not a boolean: '{self.value}'")

    def __str__(self) -> str:
        return f'{self.name}="{self.value}"'
