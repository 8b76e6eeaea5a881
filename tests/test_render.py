"""Tests for Mustache template rendering."""

from dataclasses import dataclass
from dataclasses import field
from io import StringIO
from types import SimpleNamespace

from pydantic import BaseModel
import pytest

from pydantic_mustache import EscapePolicy
from pydantic_mustache import MissingVariableError
from pydantic_mustache import RenderConfig
from pydantic_mustache import Template
from pydantic_mustache import render
from pydantic_mustache import render_to

STRICT = RenderConfig(allow_missing=False)


@dataclass
class Settings:
    """Settings exposed through an accessor."""

    Allow: bool


@dataclass
class User:
    """User with data fields and accessor methods."""

    Name: str
    Id: int
    Friends: list["User"] = field(default_factory=list)

    def func1(self) -> str:
        return self.Name

    def func3(self) -> dict[str, str]:
        return {"name": self.Name}

    def func4(self) -> None:
        return None

    def func5(self) -> Settings:
        return Settings(Allow=True)

    def func6(self) -> list[Settings]:
        return [Settings(Allow=True)]


@dataclass
class Category:
    """Category whose display name is computed."""

    Tag: str
    Description: str

    def display_name(self) -> str:
        return f"{self.Tag} - {self.Description}"


class Person(BaseModel):
    """Pydantic context."""

    name: str
    age: int


class TestVariables:
    """Test variable interpolation."""

    def test_simple_substitution(self) -> None:
        """Test basic variable substitution."""
        assert render("Hello {{name}}!", {"name": "World"}) == "Hello World!"

    def test_multiple_variables(self) -> None:
        """Test multiple variable substitutions."""
        result = render(
            "{{greeting}} {{name}}, you are {{age}} years old!",
            {"greeting": "Hello", "name": "Alice", "age": 30},
        )
        assert result == "Hello Alice, you are 30 years old!"

    @pytest.mark.parametrize(
        "text", ["", "hello world", "a { b } c", "line\r\n\n  indented\t", "}} {"]
    )
    def test_literal_text(self, text: str) -> None:
        """Test text without open delimiters renders unchanged for any context."""
        assert render(text) == text
        assert render(text, {"a": 1}, [1, 2]) == text

    def test_html_escaping(self) -> None:
        """Test HTML escaping of variables."""
        assert render("{{var}}", {"var": "5 > 2"}) == "5 &gt; 2"
        assert render("{{var}}", {"var": '& " < >'}) == "&amp; &quot; &lt; &gt;"

    def test_unescaped_variables(self) -> None:
        """Test triple mustache and ampersand skip escaping."""
        data = {"var": "5 > 2"}
        assert render("{{{var}}}", data) == "5 > 2"
        assert render("{{&var}}", data) == "5 > 2"

    def test_numbers_and_booleans(self) -> None:
        """Test scalar values render as text."""
        data = {"a": 1.21, "b": 5.0, "c": True, "d": None, "e": 0}
        assert render("{{a}} {{b}} {{c}} {{d}} {{e}}", data) == "1.21 5 true  0"

    def test_pydantic_context(self) -> None:
        """Test pydantic models as contexts."""
        assert render("{{name}} is {{age}}", Person(name="Ada", age=36)) == "Ada is 36"

    def test_dataclass_accessor(self) -> None:
        """Test a zero-argument accessor on a dataclass."""
        category = Category(Tag="a", Description="b")
        assert render("{{display_name}}", category) == "a - b"

    def test_accessor_result_not_expanded(self) -> None:
        """Test accessor results are data, not templates."""

        class Frame:
            def raw(self) -> str:
                return "{{x}}"

        assert render("{{raw}}", Frame(), {"x": "no"}) == "{{x}}"


class TestMultipleContexts:
    """Test rendering with several context frames."""

    def test_frames_are_combined(self) -> None:
        """Test names resolve across all supplied contexts."""
        obj = SimpleNamespace(World="world")
        assert render("{{hello}} {{World}}", {"hello": "hello"}, obj) == "hello world"
        assert render("{{hello}} {{World}}", obj, {"hello": "hello"}) == "hello world"

    def test_first_context_wins(self) -> None:
        """Test the first context shadows later ones."""
        assert render("{{x}}", {"x": "first"}, {"x": "second"}) == "first"

    def test_no_contexts(self) -> None:
        """Test rendering without any context."""
        assert render("a{{b}}c") == "ac"


class TestSections:
    """Test section rendering."""

    def test_section_with_list(self) -> None:
        """Test section rendering with list."""
        result = render("{{#items}}{{.}} {{/items}}", {"items": ["a", "b", "c"]})
        assert result == "a b c "

    def test_section_with_bool(self) -> None:
        """Test section rendering with booleans."""
        template = "{{#show}}visible{{/show}}"
        assert render(template, {"show": True}) == "visible"
        assert render(template, {"show": False}) == ""

    def test_boolean_section_keeps_frame(self) -> None:
        """Test a boolean section renders against the enclosing frame."""
        data = SimpleNamespace(A=True, B="hello")
        assert render("{{#A}}{{B}}{{/A}}", data) == "hello"

    def test_list_of_objects(self) -> None:
        """Test each list element becomes the top frame."""
        users = [User(Name="Mike", Id=1), User(Name="Anna", Id=2)]
        result = render("{{#users}}{{Name}}:{{Id}} {{/users}}", {"users": users})
        assert result == "Mike:1 Anna:2 "

    def test_mapping_section(self) -> None:
        """Test a mapping value is pushed as a frame."""
        data = {"outer": {"inner": {"value": "nested"}}}
        assert render("{{#outer}}{{#inner}}{{value}}{{/inner}}{{/outer}}", data) == (
            "nested"
        )

    def test_empty_mapping_is_truthy(self) -> None:
        """Test an empty mapping still renders its section."""
        assert render("{{#m}}yes{{/m}}", {"m": {}}) == "yes"

    def test_zero_is_truthy(self) -> None:
        """Test zero renders its section."""
        assert render("{{#n}}yes{{/n}}", {"n": 0}) == "yes"

    @pytest.mark.parametrize("value", [None, False, "", "  ", [], ()])
    def test_empty_values_skip_section(self, value: object) -> None:
        """Test falsey values skip the section."""
        assert render("{{#users}}gone{{Name}}{{/users}}", {"users": value}) == ""

    def test_missing_section(self) -> None:
        """Test a missing section name renders nothing, even when strict."""
        assert render("{{#dne}}x{{/dne}}", {}, config=STRICT) == ""

    def test_implicit_iterator(self) -> None:
        """Test '.' over strings, integers and floats."""
        template = "{{#list}}({{.}}){{/list}}"
        assert render(template, {"list": ["a", "b", "c"]}) == "(a)(b)(c)"
        assert render(template, {"list": [1, 2, 3]}) == "(1)(2)(3)"
        assert render(template, {"list": [1.10, 2.20, 3.30]}) == "(1.1)(2.2)(3.3)"

    def test_generator(self) -> None:
        """Test iterators are consumed as lists."""
        assert render("{{#n}}{{.}}{{/n}}", {"n": iter([1, 2])}) == "12"

    def test_iterator_in_inverted_section(self) -> None:
        """Test an empty iterator is empty for both section kinds."""
        template = "{{#g}}items{{/g}}{{^g}}empty{{/g}}"
        assert render(template, {"g": iter([])}) == "empty"
        assert render("{{^g}}empty{{/g}}", {"g": iter([1])}) == ""
        assert render("{{^g}}empty{{/g}}", {"g": (n for n in [])}) == "empty"

    def test_accessor_sections(self) -> None:
        """Test accessors returning mappings, None, objects and lists."""
        data = {"users": [User(Name="Mike", Id=1)]}

        template = "{{#users}}{{#func3}}{{name}}{{/func3}}{{/users}}"
        assert render(template, data) == "Mike"

        template = "{{#users}}{{#func4}}{{name}}{{/func4}}{{/users}}"
        assert render(template, data) == ""

        template = "{{#users}}{{#func5}}{{#Allow}}abcd{{/Allow}}{{/func5}}{{/users}}"
        assert render(template, data) == "abcd"

        template = "{{#users}}{{#func6}}{{#Allow}}abcd{{/Allow}}{{/func6}}{{/users}}"
        assert render(template, data) == "abcd"

        template = "{{#users}}{{func1}}{{/users}}"
        assert render(template, data) == "Mike"

    def test_context_chaining(self) -> None:
        """Test inner frames see names from outer frames."""
        data = {"section": {"a": "x"}, "b": "y"}
        assert render("{{#section}}{{a}}{{b}}{{/section}}", data) == "xy"

    def test_nested_lists(self) -> None:
        """Test nested list sections."""
        mike = User(Name="Mike", Id=1, Friends=[User(Name="Anna", Id=2)])
        template = "{{#users}}{{Name}}:{{#Friends}}{{Name}}{{/Friends}}{{/users}}"
        assert render(template, {"users": [mike]}) == "Mike:Anna"


class TestInvertedSections:
    """Test inverted section rendering."""

    def test_inverted_section(self) -> None:
        """Test inverted section rendering."""
        template = "{{^show}}hidden{{/show}}"
        assert render(template, {"show": False}) == "hidden"
        assert render(template, {"show": True}) == ""

    def test_inverted_missing_and_empty(self) -> None:
        """Test missing names and empty lists render inverted sections."""
        template = "{{^a}}b{{/a}}"
        assert render(template, {}) == "b"
        assert render(template, {"a": []}) == "b"
        assert render(template, {"a": [1]}) == ""
        assert render(template, {"a": {}}) == ""


class TestMissingVariables:
    """Test the missing-variable policy."""

    def test_missing_variable_non_strict(self) -> None:
        """Test missing variables render empty by default."""
        assert render("Hello {{name}}!", {}) == "Hello !"

    def test_missing_variable_strict(self) -> None:
        """Test missing variables raise when not allowed."""
        with pytest.raises(MissingVariableError, match="Missing variable") as exc:
            render("Hello {{name}}!", {}, config=STRICT)
        assert exc.value.name == "name"

    def test_missing_dotted_variable_strict(self) -> None:
        """Test a broken dotted chain raises when not allowed."""
        with pytest.raises(MissingVariableError):
            render("{{a.b}}", {"a": {}}, config=STRICT)

    def test_found_none_is_not_missing(self) -> None:
        """Test a variable bound to None is not a miss."""
        assert render("[{{x}}]", {"x": None}, config=STRICT) == "[]"

    def test_partial_output_kept_on_error(self) -> None:
        """Test output written before the failing tag stays in the sink."""
        sink = StringIO()
        with pytest.raises(MissingVariableError):
            render_to(sink, "before {{dne}} after", {}, config=STRICT)
        assert sink.getvalue() == "before "


class TestEscaping:
    """Test escape configuration."""

    def test_no_escape_policy(self) -> None:
        """Test disabling escaping."""
        config = RenderConfig(escape_policy=EscapePolicy.NONE)
        assert render("{{x}}", {"x": "<b>"}, config=config) == "<b>"

    def test_custom_escape(self) -> None:
        """Test a custom escape function overrides the policy."""
        config = RenderConfig(escape=str.upper)
        assert render("{{x}}{{{x}}}", {"x": "ab"}, config=config) == "ABab"


class TestTemplate:
    """Test the Template object."""

    def test_render_many_times(self) -> None:
        """Test a parsed template renders repeatedly with different data."""
        template = Template.parse("Hi {{name}}")
        assert template.render({"name": "a"}) == "Hi a"
        assert template.render({"name": "b"}) == "Hi b"

    def test_render_to_sink(self) -> None:
        """Test rendering into a text sink."""
        sink = StringIO()
        Template.parse("Hi {{name}}").render_to(sink, {"name": "a"})
        assert sink.getvalue() == "Hi a"

    def test_repr(self) -> None:
        """Test the repr names the source."""
        assert "Hi {{name}}" in repr(Template.parse("Hi {{name}}"))
