"""
Compiled XPath queries.

An expression is compiled once by `lxml.etree.XPath` and can then be
evaluated against any number of scopes. Compilation errors are raised
immediately, never at evaluation time.

Example:
    >>> adults = compile_query('person[@age >= $min]', variables={'min': 18}, kind=NodeKind.ELEMENT)
    >>> [p.attribute_map()['name'] for p in adults.evaluate_all(doc)]
    ['John Doe', 'Mary Sue']
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from lxml import etree

from fluent_xml.exceptions import QueryCompileError, QueryEvaluationError
from fluent_xml.models import Namespace
from fluent_xml.traversal.attribute import AttributeView
from fluent_xml.types import NodeKind

logger = logging.getLogger(__name__)


def _classify(result: Any) -> Tuple[Optional[NodeKind], Any]:
    """Return the kind of a raw XPath result and its wrapped form."""
    from fluent_xml.traversal.element import ElementTraveler

    if isinstance(result, etree._Comment):
        return NodeKind.COMMENT, result.text or ""
    if isinstance(result, etree._Element):
        if isinstance(result.tag, str):
            return NodeKind.ELEMENT, ElementTraveler(result)
        # processing instructions and entities
        return None, result
    if isinstance(result, str):
        if getattr(result, 'is_attribute', False):
            return NodeKind.ATTRIBUTE, AttributeView.of(result.getparent(), result.attrname)
        return NodeKind.TEXT, str(result)
    return None, result


class CompiledQuery:
    """
    A compiled XPath expression.

    Args:
        expression: XPath 1.0 expression
        namespaces: Namespaces usable in the expression (each needs a prefix)
        variables: Default values for $variables, overridable per evaluation
        kind: Kind of results to keep (everything by default)

    Raises:
        QueryCompileError: If the expression or a namespace is invalid
    """

    def __init__(
        self,
        expression: str,
        namespaces: Iterable[Namespace] = (),
        variables: Optional[Mapping[str, Any]] = None,
        kind: Union[NodeKind, str] = NodeKind.ANY
    ):
        self.expression = expression
        self.kind = NodeKind(kind)
        self.variables = dict(variables or {})

        nsmap = {}
        for namespace in namespaces:
            if not namespace.prefix:
                cause = ValueError(f"XPath cannot use a namespace without prefix ({namespace.uri})")
                logger.error(f"Failed to compile '{expression}': {cause}")
                raise QueryCompileError(expression, cause)
            nsmap[namespace.prefix] = namespace.uri
        self.namespaces = nsmap

        try:
            self._xpath = etree.XPath(expression, namespaces=nsmap or None)
        except etree.XPathError as e:
            logger.error(f"Failed to compile '{expression}': {e}")
            raise QueryCompileError(expression, e) from e

        logger.debug(f"Compiled XPath expression '{expression}'")

    def _evaluate(self, scope: Any, variables: Mapping[str, Any]) -> List[Any]:
        element = getattr(scope, 'source', scope)
        values = {**self.variables, **variables}
        try:
            result = self._xpath(element, **values)
        except etree.XPathError as e:
            logger.error(f"Failed to evaluate '{self.expression}': {e}")
            raise QueryEvaluationError(self.expression, e) from e

        if isinstance(result, list):
            return result
        return [result]

    def evaluate_all(self, scope: Any, kind: Optional[Union[NodeKind, str]] = None, **variables: Any) -> List[Any]:
        """
        Evaluate against `scope` and return every result of the accepted kind.

        Args:
            scope: A traveler, builder or raw lxml element/document
            kind: Overrides the kind given at compile time
            **variables: Values for $variables (override the compiled defaults)

        Returns:
            Wrapped results in document order: elements as `ElementTraveler`,
            attributes as `AttributeView`, text and comments as `str`, other
            values (numbers, booleans) unchanged

        Raises:
            QueryEvaluationError: If evaluation fails (e.g. an unbound variable)
        """
        accepted = NodeKind(kind) if kind is not None else self.kind
        results = []
        for raw in self._evaluate(scope, variables):
            result_kind, wrapped = _classify(raw)
            if accepted.accepts(result_kind):
                results.append(wrapped)
        return results

    def evaluate_first(self, scope: Any, kind: Optional[Union[NodeKind, str]] = None, **variables: Any) -> Any:
        """Return the first accepted result of evaluating against `scope`, or None."""
        results = self.evaluate_all(scope, kind, **variables)
        return results[0] if results else None

    def __repr__(self) -> str:
        return f"CompiledQuery({self.expression!r}, kind={self.kind.value})"


def compile_query(
    expression: str,
    namespaces: Iterable[Namespace] = (),
    variables: Optional[Mapping[str, Any]] = None,
    kind: Union[NodeKind, str] = NodeKind.ANY
) -> CompiledQuery:
    """Compile an XPath expression; see `CompiledQuery`."""
    return CompiledQuery(expression, namespaces, variables, kind)
