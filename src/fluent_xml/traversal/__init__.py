"""
Traversal façade: typed lookups and compiled XPath queries over lxml trees.
"""

from fluent_xml.traversal.attribute import AttributeView
from fluent_xml.traversal.document import DocumentTraveler, traverse, from_string, throw_missing
from fluent_xml.traversal.element import ElementTraveler, Traveler
from fluent_xml.traversal.parser import parse, parse_string
from fluent_xml.traversal.query import CompiledQuery, compile_query

__all__ = [
    'AttributeView',
    'CompiledQuery',
    'DocumentTraveler',
    'ElementTraveler',
    'Traveler',
    'traverse',
    'from_string',
    'throw_missing',
    'compile_query',
    'parse',
    'parse_string',
]
