"""Template interpolation tests."""

from flowlink.interpolation import (
    get_context_value,
    interpolate,
    interpolate_value,
    to_text,
)


def test_interpolate_resolves_nested_path():
    assert interpolate("Hello {{user.name}}", {"user": {"name": "Ann"}}) == "Hello Ann"


def test_unresolved_token_is_left_verbatim():
    assert interpolate("Hi {{missing}}", {}) == "Hi {{missing}}"
    assert interpolate("Hi {{ user.email }}", {"user": {"name": "Ann"}}) == (
        "Hi {{ user.email }}"
    )


def test_interpolate_trims_paths_and_handles_several_tokens():
    context = {"deal": {"amount": 1200, "stage": "won"}}
    result = interpolate("{{ deal.stage }}: {{deal.amount}} ({{deal.owner}})", context)
    assert result == "won: 1200 ({{deal.owner}})"


def test_interpolate_stringifies_values():
    context = {"none": None, "flag": True, "tags": ["a", "b"]}
    assert interpolate("[{{none}}]", context) == "[]"
    assert interpolate("{{flag}}", context) == "true"
    assert interpolate("{{tags}}", context) == '["a", "b"]'


def test_get_context_value_walks_mappings_and_lists():
    context = {"records": [{"name": "John"}], "record": {"name": "Jane"}}
    assert get_context_value("record.name", context) == "Jane"
    assert get_context_value("records.0.name", context) == "John"
    assert get_context_value("records.5.name", context) is None
    assert get_context_value("record.name.first", context) is None
    assert get_context_value("absent", context) is None


def test_interpolate_value_only_touches_templated_strings():
    context = {"record": {"name": "John", "email": "john@example.com"}}
    fields = {
        "name": "{{record.name}}",
        "email": "{{record.email}}",
        "source": "workflow",
        "score": 10,
        "rows": [["{{record.name}}", 3]],
    }
    assert interpolate_value(fields, context) == {
        "name": "John",
        "email": "john@example.com",
        "source": "workflow",
        "score": 10,
        "rows": [["John", 3]],
    }


def test_template_text_matches_condition_text():
    assert to_text(True) == "true"
    assert to_text(None) == ""
    assert to_text({"a": 1}) == '{"a": 1}'
    assert to_text(3.5) == "3.5"
