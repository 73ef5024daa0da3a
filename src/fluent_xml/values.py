"""
Conversion of Python values into attribute values and text content.

The rule is uniform and never locale sensitive, so the same value always
produces the same characters in the output.
"""

from datetime import date, datetime, time
from enum import Enum
from typing import Any


def stringify(value: Any) -> str:
    """
    Convert a value into the text written to the XML tree.

    Rules:
        - bool: 'true' / 'false'
        - Enum members: the member name
        - float: shortest round-tripping form ('1.0', '13.37', '1e+20')
        - datetime / date / time: ISO-8601
        - anything else: str(value)

    Raises:
        TypeError: If value is None

    Example:
        >>> stringify(False)
        'false'
        >>> stringify(2)
        '2'
        >>> stringify(1.0)
        '1.0'
    """
    if value is None:
        raise TypeError("None cannot be written to an XML document")
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)
