"""
Serialization options for documents produced or traversed by fluent-xml.

Each field maps onto an option of `lxml.etree.tostring` / `lxml.etree.indent`.
"""

import codecs

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from fluent_xml.validators import validate_encoding, validate_indent_width


class OutputFormat(BaseModel):
    """
    Immutable output configuration.

    Use one of the presets and derive variations with `model_copy`:

    Example:
        >>> fmt = OutputFormat.pretty().model_copy(update={'indent_width': 4})
        >>> fmt.indent, fmt.indent_width
        (True, 4)
        >>> OutputFormat.compact().indent
        False
    """

    indent: bool = Field(
        default=True,
        description="Pretty-print the output with one element per line"
    )

    indent_width: int = Field(
        default=2,
        description="Number of spaces per indentation level (only used when indent is on)"
    )

    omit_declaration: bool = Field(
        default=False,
        description="Leave out the <?xml ...?> declaration"
    )

    omit_encoding: bool = Field(
        default=False,
        description="Write the declaration without its encoding pseudo-attribute (UTF-8 or ASCII output only)"
    )

    encoding: str = Field(
        default="UTF-8",
        description="Output character encoding",
        examples=["UTF-8", "ISO-8859-1"]
    )

    expand_empty_elements: bool = Field(
        default=False,
        description="Write empty elements as <a></a> instead of <a/>"
    )

    model_config = ConfigDict(frozen=True)

    _validate_encoding = field_validator('encoding')(validate_encoding)
    _validate_indent_width = field_validator('indent_width')(validate_indent_width)

    @model_validator(mode='after')
    def check_omit_encoding(self) -> 'OutputFormat':
        """
        A declaration without encoding is only readable as UTF-8 (or its ASCII subset).

        Any other encoding would be misread by parsers, and UTF-16 output
        would get a byte order mark in the middle of the document.
        """
        if self.omit_encoding and codecs.lookup(self.encoding).name not in ("utf-8", "ascii"):
            raise ValueError(
                f"omit_encoding requires UTF-8 or ASCII output, got: '{self.encoding}'"
            )
        return self

    @classmethod
    def pretty(cls) -> 'OutputFormat':
        """Indented output, two spaces per level, declaration included."""
        return cls()

    @classmethod
    def compact(cls) -> 'OutputFormat':
        """Everything on one line, declaration included."""
        return cls(indent=False)

    @classmethod
    def raw(cls) -> 'OutputFormat':
        """Whitespace exactly as stored in the tree, no declaration."""
        return cls(indent=False, omit_declaration=True)
