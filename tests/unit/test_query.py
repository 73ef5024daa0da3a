"""
Unit tests for compiled XPath queries.
"""

import pytest

from fluent_xml import (
    AttributeView,
    ElementTraveler,
    Namespace,
    NodeKind,
    QueryCompileError,
    QueryEvaluationError,
    compile_query,
    from_string,
    throw_missing,
    xml,
)


@pytest.fixture
def doc(people_xml):
    return from_string(people_xml)


class TestCompileQuery:
    """Test suite for compile_query()."""

    @pytest.mark.parametrize('expression', ['//person[', 'person[@age >', '???'])
    def test_invalid_expression_fails_eagerly(self, expression):
        """Should raise QueryCompileError at compile time."""
        with pytest.raises(QueryCompileError) as exc_info:
            compile_query(expression)

        assert exc_info.value.expression == expression

    def test_namespace_without_prefix_rejected(self):
        """Should refuse namespaces XPath cannot address."""
        with pytest.raises(QueryCompileError, match='without prefix'):
            compile_query('a:item', namespaces=[Namespace.of('urn:a')])

    def test_kind_accepts_strings(self):
        """Should convert kind names into NodeKind."""
        assert compile_query('person', kind='element').kind is NodeKind.ELEMENT

    def test_repr(self):
        """Should show expression and kind."""
        assert repr(compile_query('person')) == "CompiledQuery('person', kind=any)"


class TestEvaluate:
    """Test suite for evaluate_all() / evaluate_first()."""

    def test_elements_are_wrapped(self, doc):
        """Should return element travelers in document order."""
        results = compile_query('person').evaluate_all(doc)

        assert all(isinstance(r, ElementTraveler) for r in results)
        assert [r.attribute_map()['name'] for r in results] == ['John Doe', 'Mary Sue']

    def test_attributes_are_wrapped(self, doc):
        """Should return attribute views for attribute results."""
        results = compile_query('person/@name').evaluate_all(doc)

        assert all(isinstance(r, AttributeView) for r in results)
        assert [r.value for r in results] == ['John Doe', 'Mary Sue']
        assert results[0].element.tag == 'person'

    def test_text_and_comments_as_strings(self, doc):
        """Should return text and comments as plain strings."""
        assert compile_query('team/text()').evaluate_all(doc) == ['core']
        assert compile_query('comment()').evaluate_all(doc) == ['staff list']

    def test_scalar_results(self, doc):
        """Should pass numbers, strings and booleans through."""
        assert compile_query('count(person)').evaluate_all(doc) == [2.0]
        assert compile_query('boolean(team)').evaluate_first(doc) is True

    def test_kind_filters_results(self, doc):
        """Should drop results of other kinds."""
        query = compile_query('node()', kind=NodeKind.ELEMENT)

        assert [r.name for r in query.evaluate_all(doc)] == ['person', 'person', 'team']
        assert query.evaluate_all(doc, kind=NodeKind.COMMENT) == ['staff list']
        assert query.evaluate_all(doc, kind=NodeKind.ATTRIBUTE) == []

    def test_variables(self, doc):
        """Should bind compile-time defaults and per-call values."""
        query = compile_query('person[@age >= $min]', variables={'min': 21}, kind=NodeKind.ELEMENT)

        assert [p.attribute_map()['name'] for p in query.evaluate_all(doc)] == ['Mary Sue']
        assert len(query.evaluate_all(doc, min=18)) == 2

    def test_unbound_variable(self, doc):
        """Should raise QueryEvaluationError for unbound variables."""
        query = compile_query('person[@age > $missing]')

        with pytest.raises(QueryEvaluationError) as exc_info:
            query.evaluate_all(doc)

        assert exc_info.value.expression == 'person[@age > $missing]'

    def test_evaluate_first_empty(self, doc):
        """Should return None when nothing matches."""
        assert compile_query('robot').evaluate_first(doc) is None

    def test_namespaces(self):
        """Should resolve prefixes through the given namespaces."""
        doc = from_string('<root xmlns="urn:a"><item/><item/></root>')
        a = Namespace.of('urn:a', prefix='a')

        assert len(compile_query('a:item', namespaces=[a]).evaluate_all(doc)) == 2
        assert compile_query('item').evaluate_all(doc) == []

    def test_reused_across_documents(self):
        """Should evaluate one compiled query against many scopes."""
        query = compile_query('count(*)')

        assert query.evaluate_first(from_string('<a><b/></a>')) == 1.0
        assert query.evaluate_first(from_string('<a><b/><c/></a>')) == 2.0

    def test_evaluate_on_builder(self):
        """Should accept builders and raw lxml elements as scope."""
        doc = xml('root')
        doc.element('a')

        assert compile_query('count(a)').evaluate_first(doc) == 1.0
        assert compile_query('count(a)').evaluate_first(doc.root) == 1.0


class TestTravelerQueries:
    """Test suite for queries passed to traveler lookups."""

    def test_element_with_query(self, doc):
        """Should use the first element result of the query."""
        query = compile_query('person[@name="Mary Sue"]')

        person = doc.element(query, if_missing=throw_missing('no Mary'))

        assert person.attribute('age', if_present=AttributeView.as_int, if_missing=lambda: 0) == 22

    def test_element_with_query_ignores_other_kinds(self, doc):
        """Should treat attribute-only results as missing for element lookups."""
        assert doc.element(compile_query('person/@name'), if_missing=lambda: 'none') == 'none'

    def test_elements_with_query(self, doc):
        """Should yield every element result."""
        assert len(list(doc.elements(compile_query('*')))) == 3

    def test_attribute_with_query(self, doc):
        """Should use the first attribute result of the query."""
        age = doc.attribute(compile_query('person/@age'), if_missing=throw_missing('no age'))

        assert age.value == '20'

    def test_attributes_with_query(self, doc):
        """Should yield every attribute result."""
        assert [v.value for v in doc.attributes(compile_query('person/@age'))] == ['20', '22']

    def test_match(self, doc):
        """Should return every result of the query."""
        assert len(doc.match(compile_query('person/@*'))) == 5


class TestNodeKind:
    """Test suite for NodeKind."""

    def test_any_accepts_everything(self):
        """Should let ANY accept all kinds, including scalars."""
        assert NodeKind.ANY.accepts(NodeKind.ELEMENT)
        assert NodeKind.ANY.accepts(None)

    def test_specific_kind(self):
        """Should only accept the same kind."""
        assert NodeKind.TEXT.accepts(NodeKind.TEXT)
        assert not NodeKind.TEXT.accepts(NodeKind.COMMENT)
        assert not NodeKind.ELEMENT.accepts(None)
