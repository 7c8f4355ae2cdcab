"""Tests for the placeholder template renderer."""

from fitloop.generators.template import find_placeholders, format_value, render


class TestRender:
    """Tests for render()."""

    def test_scalar_substitution(self):
        """Test that scalar placeholders are replaced."""
        assert render("Hello {{name}}!", {"name": "Alice"}) == "Hello Alice!"

    def test_repeated_placeholder(self):
        """Test that every occurrence of a key is replaced."""
        assert render("{{a}}-{{a}}", {"a": 1}) == "1-1"

    def test_missing_key_left_verbatim(self):
        """Test that unknown placeholders survive for a later pass."""
        assert render("{{known}} {{unknown}}", {"known": "x"}) == "x {{unknown}}"

    def test_zero_is_rendered(self):
        """Test that falsy numbers are not treated as missing."""
        assert render("{{n}}", {"n": 0}) == "0"

    def test_none_renders_empty(self):
        """Test that None renders as an empty string."""
        assert render("[{{n}}]", {"n": None}) == "[]"

    def test_block_repeats_per_item(self):
        """Test that a block is rendered once per item, newline joined."""
        template = "{{#items}}- {{name}}{{/items}}"
        data = {"items": [{"name": "Squat"}, {"name": "Row"}]}

        assert render(template, data) == "- Squat\n- Row"

    def test_block_item_shadows_outer_key(self):
        """Test that item fields take precedence over outer values."""
        template = "{{#items}}{{name}}/{{unit}}{{/items}}"
        data = {"unit": "lb", "name": "outer", "items": [{"name": "inner"}]}

        assert render(template, data) == "inner/lb"

    def test_empty_block(self):
        """Test that an empty list renders nothing."""
        assert render("a{{#items}}x{{/items}}b", {"items": []}) == "ab"

    def test_missing_block(self):
        """Test that a missing block key renders nothing."""
        assert render("a{{#items}}x{{/items}}b", {}) == "ab"

    def test_non_sequence_block(self):
        """Test that a string or scalar block value renders nothing."""
        assert render("{{#items}}x{{/items}}", {"items": "abc"}) == ""
        assert render("{{#items}}x{{/items}}", {"items": 5}) == ""

    def test_inserted_values_not_rerendered(self):
        """Test that placeholder syntax inside a value is left alone."""
        result = render("{{a}}", {"a": "{{b}}", "b": "oops"})

        assert result == "{{b}}"

    def test_multiline_block(self):
        """Test that block bodies may span lines."""
        template = "{{#rows}}\n* {{v}}\n{{/rows}}"
        result = render(template, {"rows": [{"v": 1}, {"v": 2}]})

        assert result == "\n* 1\n\n\n* 2\n"


class TestFormatValue:
    """Tests for value formatting."""

    def test_whole_float_prints_as_int(self):
        """Test that 30.0 is shown as 30."""
        assert format_value(30.0) == "30"
        assert format_value(32.5) == "32.5"

    def test_bool(self):
        """Test boolean formatting."""
        assert format_value(True) == "true"
        assert format_value(False) == "false"

    def test_list_joined(self):
        """Test that plain lists are joined with commas."""
        assert format_value(["a", "b"]) == "a, b"


def test_find_placeholders():
    """Test that remaining scalar placeholders are reported."""
    assert find_placeholders("{{a}} and {{b}} and {{a}}") == {"a", "b"}
    assert find_placeholders("no tokens") == set()
