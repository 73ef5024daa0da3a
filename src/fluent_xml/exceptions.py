"""
Exception hierarchy for fluent-xml.

lxml errors rarely say *where* in a fluently built or traversed tree the
problem happened. Every error raised by the façades is translated into one of
these types, carrying a description of the location plus the original cause.
"""

from typing import Optional


class FluentXmlError(Exception):
    """Base class for every error raised by fluent-xml."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class BuildError(FluentXmlError):
    """
    Raised when the builder fails to create or serialize part of a document.

    Args:
        entity: Path of the node being built (e.g. 'people/person/@age')
        cause: Original exception raised by lxml
    """

    def __init__(self, entity: str, cause: BaseException):
        super().__init__(
            f'fluent-xml encountered a problem when trying to create "{entity}": {cause}',
            cause
        )
        self.entity = entity


class ParseError(FluentXmlError):
    """
    Raised when a source document cannot be read or is not well-formed.

    Args:
        source: Description of the source (file path, '<string>', ...)
        cause: Original exception raised by lxml
    """

    def __init__(self, source: str, cause: BaseException):
        super().__init__(
            f'fluent-xml encountered a problem when trying to parse "{source}": {cause}',
            cause
        )
        self.source = source


class QueryCompileError(FluentXmlError):
    """Raised eagerly when an XPath expression cannot be compiled."""

    def __init__(self, expression: str, cause: BaseException):
        super().__init__(f'Invalid XPath expression "{expression}": {cause}', cause)
        self.expression = expression


class QueryEvaluationError(FluentXmlError):
    """Raised when a compiled XPath expression fails during evaluation."""

    def __init__(self, expression: str, cause: BaseException):
        super().__init__(f'Failed to evaluate XPath expression "{expression}": {cause}', cause)
        self.expression = expression


class NotFoundError(FluentXmlError, LookupError):
    """Raised by `throw_missing` callbacks when a required node is absent."""
