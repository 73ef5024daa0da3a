"""
Pydantic models shared by the builder and traversal façades.

These immutable models describe namespaces and the serializer/parser
options that are handed over to lxml.
"""

from fluent_xml.models.namespace import Namespace, NO_NAMESPACE
from fluent_xml.models.output_format import OutputFormat
from fluent_xml.models.parser_options import ParserOptions

__all__ = [
    'Namespace',
    'NO_NAMESPACE',
    'OutputFormat',
    'ParserOptions',
]
