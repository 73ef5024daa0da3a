"""
Enumerations shared across fluent-xml.
"""

from enum import Enum
from typing import Optional


class NodeKind(str, Enum):
    """
    Kind of node a compiled query is expected to return.

    Results of other kinds are dropped when a query is evaluated, so a query
    compiled with `NodeKind.ELEMENT` only ever yields element travelers.

    Example:
        >>> NodeKind('element') is NodeKind.ELEMENT
        True
    """

    ELEMENT = 'element'
    ATTRIBUTE = 'attribute'
    TEXT = 'text'
    COMMENT = 'comment'
    ANY = 'any'

    def accepts(self, kind: Optional['NodeKind']) -> bool:
        """Check whether a result of `kind` passes this filter (None: neither node kind)."""
        return self is NodeKind.ANY or self is kind
