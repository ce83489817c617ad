"""
Tests for the public Template API: call forms, introspection, identity and binding.
"""

import io

import pytest

import urit
from urit import BoundTemplate, ParseError, Template, UnknownVariableError, VariableResolver


class _Document:
    """Объект-резолвер: значения вычисляются по запросу."""

    def __init__(self, **fields):
        self.fields = fields
        self.requested = []

    def resolve(self, name):
        self.requested.append(name)
        return self.fields.get(name)


class TestExpandForms:

    def setup_method(self):
        self.template = Template("http://example.com/search{?q,lang}")

    def test_no_values(self):
        assert self.template.expand() == "http://example.com/search"

    def test_callable_resolver(self):
        assert self.template.expand(lambda name: name.upper()) == "http://example.com/search?q=Q&lang=LANG"

    def test_mapping(self):
        assert self.template.expand({"q": "cat"}) == "http://example.com/search?q=cat"

    def test_name_value_pair(self):
        assert self.template.expand("q", "cat") == "http://example.com/search?q=cat"

    def test_tuple_pair(self):
        assert self.template.expand(("lang", "fr")) == "http://example.com/search?lang=fr"

    def test_keyword_values(self):
        assert self.template.expand(q="cat", lang="en") == "http://example.com/search?q=cat&lang=en"

    def test_keywords_override_positional_source(self):
        assert self.template.expand({"q": "dog", "lang": "fr"}, q="cat") == \
            "http://example.com/search?q=cat&lang=fr"

    def test_resolver_object(self):
        doc = _Document(q="cat")
        assert isinstance(doc, VariableResolver)
        assert self.template.expand(doc) == "http://example.com/search?q=cat"
        assert doc.requested == ["q", "lang"]

    def test_none_source(self):
        assert self.template.expand(None) == "http://example.com/search"

    def test_unsupported_source(self):
        with pytest.raises(TypeError):
            self.template.expand(42)
        with pytest.raises(TypeError):
            self.template.expand("a", "b", "c")

    def test_expand_to_sink(self):
        buffer = io.StringIO()
        buffer.write("<")
        self.template.expand_to(buffer, q="x")
        buffer.write(">")
        assert buffer.getvalue() == "<http://example.com/search?q=x>"

    def test_module_level_expand(self):
        assert urit.expand("/users/{id}", id=7) == "/users/7"
        assert urit.expand("{+base}x", {"base": "/a/"}) == "/a/x"

    def test_module_level_expand_with_variable_named_template(self):
        assert urit.expand("{template}", template="x") == "x"
        assert urit.expand("/t/{template}{?args*}", template="a b", args=["1"]) == "/t/a%20b?args=1"

    def test_repeated_expansion_is_independent(self):
        assert self.template.expand(q="a") == "http://example.com/search?q=a"
        assert self.template.expand(q="b") == "http://example.com/search?q=b"


class TestIntrospection:

    def setup_method(self):
        self.template = Template("/{a}/{b,a}{?c*}")

    def test_variables_in_first_appearance_order(self):
        assert self.template.variables == ["a", "b", "c"]

    def test_contains(self):
        assert "a" in self.template
        assert "c" in self.template
        assert "d" not in self.template

    def test_elements_and_expressions(self):
        assert len(self.template) == 5
        assert len(self.template.expressions) == 3
        assert list(self.template) == list(self.template.elements)

    def test_literal_template_has_no_variables(self):
        assert Template("http://example.com").variables == []


class TestIdentity:

    def test_str_and_repr(self):
        t = Template("/x{y}")
        assert str(t) == "/x{y}"
        assert repr(t) == "Template('/x{y}')"

    def test_equality_by_source(self):
        assert Template("/x{y}") == Template.parse("/x{y}")
        assert Template("/x{y}") != Template("/x{z}")
        assert Template("/x") != "/x"

    def test_hash_by_source(self):
        assert len({Template("{a}"), Template("{a}"), Template("{b}")}) == 2

    def test_invalid_source_raises(self):
        with pytest.raises(ParseError):
            Template("{a")


class TestBoundTemplate:

    def setup_method(self):
        self.template = Template("http://example.com/{user}{?page}")

    def test_bind_and_render(self):
        bound = self.template.bind(user="fred")
        assert isinstance(bound, BoundTemplate)
        assert str(bound) == "http://example.com/fred"
        bound["page"] = 2
        assert bound.expand() == "http://example.com/fred?page=2"

    def test_template_is_unchanged(self):
        self.template.bind(user="fred")
        assert self.template.expand() == "http://example.com/"

    def test_unknown_variable(self):
        bound = self.template.bind()
        with pytest.raises(UnknownVariableError) as info:
            bound["nope"] = 1
        assert info.value.name == "nope"
        assert str(info.value) == "Variable not recognised - nope"

    def test_unknown_variable_in_bind(self):
        with pytest.raises(UnknownVariableError):
            self.template.bind(nope=1)

    def test_get_contains_clear(self):
        bound = self.template.bind(user="fred")
        assert bound["user"] == "fred"
        assert bound["page"] is None
        assert "page" in bound
        assert "nope" not in bound
        bound.clear()
        assert str(bound) == "http://example.com/"

    def test_copy_is_independent(self):
        bound = self.template.bind(user="fred")
        other = bound.copy()
        other["user"] = "wilma"
        assert str(bound) == "http://example.com/fred"
        assert str(other) == "http://example.com/wilma"
