"""Tests for response parsing."""

import pytest

from umlgen.generation.errors import GenerationFailedError
from umlgen.generation.parser import (
    extract_json_object,
    iter_json_objects,
    parse_diagram_response,
    strip_code_fences,
)


class TestStripCodeFences:
    def test_json_fence(self):
        assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_plain_fence(self):
        assert strip_code_fences('Here:\n```\n{"a": 1}\n```\nDone') == '{"a": 1}'

    def test_longest_fence_wins(self):
        text = '```\nshort\n```\ntext\n```json\n{"longer": true}\n```'

        assert strip_code_fences(text) == '{"longer": true}'

    def test_no_fence(self):
        assert strip_code_fences('  {"a": 1}  ') == '{"a": 1}'


class TestIterJsonObjects:
    def test_finds_top_level_objects(self):
        text = 'a {"x": {"y": 1}} b {"z": 2}'

        assert list(iter_json_objects(text)) == ['{"x": {"y": 1}}', '{"z": 2}']

    def test_ignores_braces_in_strings(self):
        text = '{"label": "a } b { c", "ok": true}'

        assert list(iter_json_objects(text)) == [text]

    def test_escaped_quote_in_string(self):
        text = '{"label": "say \\"}\\"", "n": 1}'

        assert list(iter_json_objects(text)) == [text]

    def test_unbalanced(self):
        assert list(iter_json_objects('{"a": {')) == []


class TestExtractJsonObject:
    def test_plain_json(self):
        assert extract_json_object('{"type": "class"}') == {"type": "class"}

    def test_fenced_json(self):
        assert extract_json_object('```json\n{"type": "activity"}\n```') == {"type": "activity"}

    def test_json_inside_prose(self):
        text = 'Sure! Here is the diagram: {"type": "sequence", "messages": []} Enjoy.'

        assert extract_json_object(text) == {"type": "sequence", "messages": []}

    def test_skips_invalid_candidates(self):
        text = "{not json} then {\"ok\": 1}"

        assert extract_json_object(text) == {"ok": 1}

    def test_array_is_not_an_object(self):
        assert extract_json_object("[1, 2, 3]") is None

    def test_no_json(self):
        assert extract_json_object("I cannot help with that.") is None


class TestParseDiagramResponse:
    def test_stamps_requested_kind(self):
        diagram = parse_diagram_response('{"states": []}', "stateMachine")

        assert diagram == {"states": [], "type": "stateMachine"}

    def test_keeps_response_kind(self):
        diagram = parse_diagram_response('{"type": "class", "classes": []}', "component")

        assert diagram["type"] == "class"

    def test_no_diagram(self):
        with pytest.raises(GenerationFailedError) as exc_info:
            parse_diagram_response("Sorry, no.", "class")

        assert "did not contain a JSON diagram" in str(exc_info.value)
        assert exc_info.value.status_code is None
