"""Tests for template parsing and schema validation."""

import pytest
from pydantic import ValidationError

from lnr.core.exceptions import ParseError
from lnr.templates.parser import load_template, parse
from lnr.templates.schema import IssueSpec, TemplateDocument, validate_template

FULL_TEMPLATE = b'''
[variables]
name = "Alfred"
floor = 3

[parent]
title = "Batcave"
description = """
Multi-line
description
"""

[[children]]
title = "Find {{name}} a cave"

[[children]]
title = "Second child"
description = "Details"
'''


class TestSchema:
    """Tests for TemplateDocument validation."""

    def test_minimal_document(self):
        document = validate_template({"parent": {"title": "Only parent"}})
        assert document.parent == IssueSpec(title="Only parent")
        assert document.children == []
        assert document.variables == {}

    def test_document_is_immutable(self):
        document = validate_template({"parent": {"title": "Only parent"}})
        with pytest.raises(ValidationError):
            document.parent = IssueSpec(title="Other")

    def test_missing_parent(self):
        with pytest.raises(ValidationError):
            validate_template({"children": [{"title": "orphan"}]})

    def test_unknown_keys_ignored(self):
        document = validate_template({"parent": {"title": "P", "team_id": "x"}, "extra": 1})
        assert document.parent.title == "P"

    def test_issue_count(self):
        document = TemplateDocument(
            parent=IssueSpec(title="P"),
            children=[IssueSpec(title="a"), IssueSpec(title="b")],
        )
        assert document.issue_count == 3


class TestParse:
    """Tests for parse()."""

    def test_full_template(self):
        document = parse(FULL_TEMPLATE)
        assert document.variables == {"name": "Alfred", "floor": "3"}
        assert document.parent.title == "Batcave"
        assert document.parent.description == "Multi-line\ndescription\n"
        assert [c.title for c in document.children] == ["Find {{name}} a cave", "Second child"]
        assert document.children[0].description is None
        assert document.children[1].description == "Details"

    def test_no_substitution_during_parse(self):
        document = parse(FULL_TEMPLATE)
        assert "{{name}}" in document.children[0].title

    def test_children_order_preserved(self):
        contents = b"[parent]\ntitle = 'P'\n" + b"".join(
            f"[[children]]\ntitle = 'child {i}'\n".encode() for i in range(10)
        )
        document = parse(contents)
        assert [c.title for c in document.children] == [f"child {i}" for i in range(10)]

    def test_invalid_toml(self):
        with pytest.raises(ParseError, match="Invalid TOML"):
            parse(b"[parent\ntitle = ")

    def test_missing_parent_section(self):
        with pytest.raises(ParseError, match="parent"):
            parse(b"[variables]\nname = 'x'\n")

    def test_missing_parent_title(self):
        with pytest.raises(ParseError, match="parent.title"):
            parse(b"[parent]\ndescription = 'no title'\n")

    def test_child_without_title(self):
        contents = b"[parent]\ntitle = 'P'\n[[children]]\ntitle = 'ok'\n[[children]]\ndescription = 'x'\n"
        with pytest.raises(ParseError, match="children.1.title"):
            parse(contents)

    def test_not_utf8(self):
        with pytest.raises(ParseError, match="UTF-8"):
            parse(b"\xff\xfe[parent]")

    def test_error_carries_source(self):
        with pytest.raises(ParseError) as exc_info:
            parse(b"nonsense", source="templates/bad.toml")
        assert exc_info.value.path == "templates/bad.toml"
        assert str(exc_info.value).startswith("templates/bad.toml: ")


class TestLoadTemplate:
    def test_reads_file(self, write_template):
        path = write_template("t.toml", "[parent]\ntitle = 'From disk'\n")
        assert load_template(path).parent.title == "From disk"

    def test_unreadable_file(self, tmp_path):
        with pytest.raises(ParseError, match="Cannot read file"):
            load_template(tmp_path / "missing.toml")
