"""
Namespace model.

lxml has no namespace object of its own: it encodes namespaces in Clark
notation ('{uri}local') and declares prefixes through `nsmap` dictionaries.
`Namespace` bundles a prefix and a URI and converts between both forms.
"""

from typing import Dict, Optional

from lxml import etree
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from fluent_xml.validators import validate_namespace_prefix


class Namespace(BaseModel):
    """
    An XML namespace: a prefix bound to a URI.

    The empty prefix with a non-empty URI is the default namespace; the empty
    prefix with an empty URI is "no namespace" (see `NO_NAMESPACE`).

    Example:
        >>> ns = Namespace.of('http://example.com/people', prefix='p')
        >>> ns.qualify('person')
        '{http://example.com/people}person'
        >>> ns.nsmap
        {'p': 'http://example.com/people'}
    """

    prefix: str = Field(
        default="",
        description="Namespace prefix, empty for the default namespace",
        examples=["xsi"]
    )

    uri: str = Field(
        default="",
        description="Namespace URI, empty for no namespace",
        examples=["http://www.w3.org/2001/XMLSchema-instance"]
    )

    model_config = ConfigDict(frozen=True)

    _validate_prefix = field_validator('prefix')(validate_namespace_prefix)

    @model_validator(mode='after')
    def check_prefix_has_uri(self) -> 'Namespace':
        """A prefix cannot be bound to the empty URI."""
        if self.prefix and not self.uri:
            raise ValueError(f"Namespace prefix '{self.prefix}' requires a non-empty URI")
        return self

    @classmethod
    def of(cls, uri: str, prefix: str = "") -> 'Namespace':
        """Create a namespace from a URI and an optional prefix."""
        return cls(prefix=prefix, uri=uri)

    @classmethod
    def of_element(cls, element: etree._Element) -> 'Namespace':
        """Return the namespace an lxml element lives in."""
        uri = etree.QName(element).namespace
        if not uri:
            return NO_NAMESPACE
        return cls(prefix=element.prefix or "", uri=uri)

    @property
    def is_empty(self) -> bool:
        return not self.uri

    @property
    def nsmap(self) -> Dict[Optional[str], str]:
        """The lxml `nsmap` entry declaring this namespace (empty for no namespace)."""
        if self.is_empty:
            return {}
        return {self.prefix or None: self.uri}

    def qualify(self, local_name: str) -> str:
        """Return `local_name` in Clark notation for this namespace."""
        if self.is_empty:
            return local_name
        return f"{{{self.uri}}}{local_name}"

    def matches(self, qualified_name: str) -> bool:
        """Check whether a Clark-notation name belongs to this namespace (prefixes are ignored)."""
        return (etree.QName(qualified_name).namespace or "") == self.uri

    def __str__(self) -> str:
        if self.is_empty:
            return "[no namespace]"
        if self.prefix:
            return f"{self.prefix}:{self.uri}"
        return self.uri


NO_NAMESPACE = Namespace()
