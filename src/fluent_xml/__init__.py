"""
fluent-xml: chained building and typed traversal of XML documents with lxml.

Build:
    >>> from fluent_xml import xml
    >>> doc = xml('people')
    >>> doc.element('person').attributes(name='John Doe', age=20).end() \\
    ...    .element('person').attributes(name='Mary Sue', age=22)
    >>> doc.save_to('people.xml')

Traverse:
    >>> from fluent_xml import traverse, throw_missing
    >>> doc = traverse('people.xml')
    >>> [p.attribute('name', if_present=lambda a: a.value, if_missing=throw_missing('no name'))
    ...  for p in doc.elements('person')]
"""

from fluent_xml.builder import (
    AttributeScope,
    DocumentBuilder,
    ElementBuilder,
    build_element,
    mutate,
    xml,
)
from fluent_xml.config import Settings, get_settings, reset_settings
from fluent_xml.exceptions import (
    BuildError,
    FluentXmlError,
    NotFoundError,
    ParseError,
    QueryCompileError,
    QueryEvaluationError,
)
from fluent_xml.models import NO_NAMESPACE, Namespace, OutputFormat, ParserOptions
from fluent_xml.traversal import (
    AttributeView,
    CompiledQuery,
    DocumentTraveler,
    ElementTraveler,
    compile_query,
    from_string,
    throw_missing,
    traverse,
)
from fluent_xml.types import NodeKind
from fluent_xml.values import stringify

__all__ = [
    # Builder
    'xml',
    'mutate',
    'build_element',
    'DocumentBuilder',
    'ElementBuilder',
    'AttributeScope',
    # Traversal
    'traverse',
    'from_string',
    'throw_missing',
    'compile_query',
    'DocumentTraveler',
    'ElementTraveler',
    'AttributeView',
    'CompiledQuery',
    # Models
    'Namespace',
    'NO_NAMESPACE',
    'OutputFormat',
    'ParserOptions',
    'NodeKind',
    # Config
    'Settings',
    'get_settings',
    'reset_settings',
    # Errors
    'FluentXmlError',
    'BuildError',
    'ParseError',
    'QueryCompileError',
    'QueryEvaluationError',
    'NotFoundError',
    # Helpers
    'stringify',
]
