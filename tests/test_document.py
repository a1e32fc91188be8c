"""Tests for jiralens.integrations.document module."""

import pytest

from jiralens.integrations.document import (
    ArrayNode,
    ObjectNode,
    OtherNode,
    TextNode,
    extract_description,
    extract_text,
    parse_document,
)


def paragraph(*texts: str) -> dict:
    return {"type": "paragraph", "content": [{"type": "text", "text": t} for t in texts]}


class TestParseDocument:
    def test_string_becomes_text_node(self):
        assert parse_document("plain") == TextNode("plain")

    def test_object_keeps_text_and_content(self):
        node = parse_document({"type": "text", "text": "hi", "content": []})

        assert isinstance(node, ObjectNode)
        assert node.text == "hi"
        assert node.content == ArrayNode(())

    def test_non_string_text_is_ignored(self):
        node = parse_document({"text": 42})

        assert isinstance(node, ObjectNode)
        assert node.text is None

    def test_null_content_is_absent(self):
        node = parse_document({"type": "doc", "content": None})

        assert node.content is None

    def test_list_becomes_array_node(self):
        node = parse_document(["a", 1])

        assert node == ArrayNode((TextNode("a"), OtherNode(1)))

    @pytest.mark.parametrize("value", [None, 3, 2.5, True])
    def test_scalars_become_other_nodes(self, value):
        assert parse_document(value) == OtherNode(value)


class TestExtractText:
    def test_bare_string_returned_unchanged(self):
        assert extract_text(parse_document("  Already text  ")) == "  Already text  "

    def test_single_paragraph(self):
        doc = {"type": "doc", "content": [paragraph("Hello world")]}

        assert extract_text(parse_document(doc)) == "Hello world"

    def test_adjacent_spans_are_space_separated(self):
        doc = {"type": "doc", "content": [paragraph("foo", "bar")]}

        assert extract_text(parse_document(doc)) == "foo bar"

    def test_nested_nodes_in_document_order(self):
        doc = {
            "type": "doc",
            "content": [
                paragraph("First"),
                {
                    "type": "bulletList",
                    "content": [
                        {"type": "listItem", "content": [paragraph("one")]},
                        {"type": "listItem", "content": [paragraph("two")]},
                    ],
                },
                paragraph("Last"),
            ],
        }

        assert extract_text(parse_document(doc)) == "First one two Last"

    def test_node_with_text_and_content_contributes_both(self):
        doc = {
            "type": "doc",
            "content": [{"text": "outer", "content": [{"text": "inner"}]}],
        }

        assert extract_text(parse_document(doc)) == "outer inner"

    def test_empty_content_gives_empty_string(self):
        assert extract_text(parse_document({"type": "doc", "content": []})) == ""

    def test_object_without_content_falls_back_to_json(self):
        value = {"type": "mention", "attrs": {"id": "1"}}

        assert extract_text(parse_document(value)) == '{"type":"mention","attrs":{"id":"1"}}'

    def test_object_with_non_list_content_falls_back_to_json(self):
        value = {"type": "doc", "content": "oops"}

        assert extract_text(parse_document(value)) == '{"type":"doc","content":"oops"}'

    def test_non_ascii_kept_in_json_fallback(self):
        assert extract_text(parse_document({"text": "café"})) == '{"text":"café"}'

    def test_bare_strings_inside_content_are_skipped(self):
        doc = {"type": "doc", "content": ["loose", paragraph("kept")]}

        assert extract_text(parse_document(doc)) == "kept"

    def test_root_array_is_walked(self):
        assert extract_text(parse_document([paragraph("a"), paragraph("b")])) == "a b"

    def test_scalar_renders_as_json(self):
        assert extract_text(parse_document(7)) == "7"

    def test_null_gives_empty_string(self):
        assert extract_text(OtherNode(None)) == ""


class TestExtractDescription:
    def test_none_stays_none(self):
        assert extract_description(None) is None

    def test_document_is_flattened(self):
        doc = {"type": "doc", "version": 1, "content": [paragraph("Retry", "transient failures.")]}

        assert extract_description(doc) == "Retry transient failures."

    def test_plain_string_description(self):
        assert extract_description("wiki markup") == "wiki markup"
