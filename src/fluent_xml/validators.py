"""
Reusable field validators for Pydantic models.

These validators are attached to the model fields of `fluent_xml.models`
with the Pydantic @field_validator decorator.
"""

import codecs

from lxml import etree


def validate_encoding(encoding: str) -> str:
    """
    Validate that an output encoding is known to Python's codec registry.

    Args:
        encoding: Encoding name (e.g., 'UTF-8', 'iso-8859-1')

    Returns:
        The validated encoding name (unchanged if valid)

    Raises:
        ValueError: If the encoding is empty or unknown

    Example:
        >>> validate_encoding('UTF-8')
        'UTF-8'
        >>> validate_encoding('klingon')  # Raises ValueError
    """
    if not encoding:
        raise ValueError("Encoding must not be empty")

    try:
        codecs.lookup(encoding)
    except LookupError as e:
        raise ValueError(f"Unknown encoding: '{encoding}'") from e

    return encoding


def validate_indent_width(width: int) -> int:
    """
    Validate an indentation width (number of spaces per level).

    Raises:
        ValueError: If width is negative
    """
    if width < 0:
        raise ValueError(f"Indent width must be >= 0, got: {width}")
    return width


def validate_namespace_prefix(prefix: str) -> str:
    """
    Validate a namespace prefix.

    The empty string stands for the default namespace. Any other prefix must
    be a valid XML name without a colon; the name check is delegated to lxml.

    Args:
        prefix: Namespace prefix (e.g., 'xsi')

    Returns:
        The validated prefix

    Raises:
        ValueError: If the prefix is not a valid NCName

    Example:
        >>> validate_namespace_prefix('xsi')
        'xsi'
        >>> validate_namespace_prefix('bad prefix')  # Raises ValueError
    """
    if prefix == "":
        return prefix

    if ":" in prefix:
        raise ValueError(f"Namespace prefix must not contain ':', got: '{prefix}'")

    try:
        etree.QName(prefix)
    except ValueError as e:
        raise ValueError(f"Invalid namespace prefix: '{prefix}'") from e

    return prefix
