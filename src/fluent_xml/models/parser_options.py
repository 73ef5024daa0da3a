"""
Parser options passed straight through to `lxml.etree.XMLParser`.
"""

from typing import Any, Dict

from lxml import etree
from pydantic import BaseModel, ConfigDict, Field


class ParserOptions(BaseModel):
    """
    Options of the lxml XML parser used by the traversal entry points.

    Defaults are the safe ones: no entity expansion and no network access.

    Example:
        >>> parser = ParserOptions(remove_blank_text=True).create_parser()
    """

    recover: bool = Field(default=False, description="Try hard to parse through broken XML")
    remove_blank_text: bool = Field(default=False, description="Discard whitespace-only text nodes")
    remove_comments: bool = Field(default=False, description="Discard comments")
    resolve_entities: bool = Field(default=False, description="Replace entities by their text value")
    huge_tree: bool = Field(default=False, description="Disable libxml2 security limits on tree size")
    no_network: bool = Field(default=True, description="Prevent network access when looking up external documents")
    dtd_validation: bool = Field(default=False, description="Validate against a DTD referenced by the document")
    load_dtd: bool = Field(default=False, description="Load and use the DTD while parsing")
    strip_cdata: bool = Field(default=True, description="Replace CDATA sections by normal text content")

    model_config = ConfigDict(frozen=True)

    def as_parser_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for `lxml.etree.XMLParser`."""
        return self.model_dump()

    def create_parser(self, **overrides: Any) -> etree.XMLParser:
        """Create a fresh lxml parser configured with these options plus `overrides`."""
        kwargs = self.as_parser_kwargs()
        kwargs.update(overrides)
        return etree.XMLParser(**kwargs)
