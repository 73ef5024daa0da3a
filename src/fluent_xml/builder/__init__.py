"""
Builder façade: chained construction of XML documents on top of lxml.
"""

from fluent_xml.builder.attributes import AttributeScope
from fluent_xml.builder.document import DocumentBuilder, xml, mutate, build_element
from fluent_xml.builder.element import ContentBuilder, ElementBuilder
from fluent_xml.values import stringify

__all__ = [
    'AttributeScope',
    'ContentBuilder',
    'DocumentBuilder',
    'ElementBuilder',
    'xml',
    'mutate',
    'build_element',
    'stringify',
]
