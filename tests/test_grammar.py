"""test_grammar.py - Unit tests for directive classification and dump payloads.

Covers:
    - classify_line() recognises message, dump and exec shapes
    - Dump and exec sigils must follow the closing bracket immediately
    - Leading whitespace is allowed and captured; other prefixes are not
    - Malformed or empty markers are not directives
    - Taglists tolerate commas and whitespace
    - parse_dump_payload() labels, separators, and container sigils
"""

import pytest

from debugcomments.grammar import (
    DirectiveKind,
    DumpEntry,
    classify_line,
    parse_dump_payload,
    parse_taglist,
)


# ---------------------------------------------------------------------------
# classify_line() — shapes
# ---------------------------------------------------------------------------


class TestClassifyShapes:
    def test_message_directive(self):
        """Text after the marker is a message payload."""
        d = classify_line("##[dbg] hello world")
        assert d.kind is DirectiveKind.MESSAGE
        assert d.payload == "hello world"
        assert d.taglist == frozenset({"dbg"})

    def test_dump_directive(self):
        """'=' right after the marker makes a dump directive."""
        d = classify_line("##[dbg]= a, b")
        assert d.kind is DirectiveKind.DUMP
        assert d.payload == "a, b"

    def test_exec_directive(self):
        """'~' right after the marker makes an exec directive."""
        d = classify_line("##[dbg]~ do_thing()")
        assert d.kind is DirectiveKind.EXEC
        assert d.payload == "do_thing()"

    def test_spaced_sigil_is_a_message(self):
        """A sigil separated from ']' by whitespace is message text."""
        d = classify_line("##[dbg] = a")
        assert d.kind is DirectiveKind.MESSAGE
        assert d.payload == "= a"

    def test_trailing_whitespace_is_stripped(self):
        d = classify_line("##[dbg] hello   \t")
        assert d.payload == "hello"

    def test_empty_message(self):
        """A bare marker is a message with an empty payload."""
        d = classify_line("##[dbg]")
        assert d.kind is DirectiveKind.MESSAGE
        assert d.payload == ""


# ---------------------------------------------------------------------------
# classify_line() — boundaries
# ---------------------------------------------------------------------------


class TestClassifyBoundaries:
    def test_leading_whitespace_is_captured_as_indent(self):
        d = classify_line("    \t##[dbg] indented")
        assert d is not None
        assert d.indent == "    \t"

    def test_code_before_marker_is_not_a_directive(self):
        """Only whitespace may precede the marker."""
        assert classify_line("x = 1  ##[dbg] trailing comment") is None

    @pytest.mark.parametrize(
        "line",
        [
            "##[dbg hello",
            "##dbg] hello",
            "##[[dbg] hello",
            "##[] hello",
            "##[ , ] hello",
            "# [dbg] hello",
            "plain text",
            "",
        ],
    )
    def test_malformed_markers_are_not_directives(self, line):
        assert classify_line(line) is None

    def test_taglist_accepts_commas_and_whitespace(self):
        d = classify_line("##[a, b  c,d] msg")
        assert d.taglist == frozenset({"a", "b", "c", "d"})

    def test_matches_uses_exact_tag_names(self):
        """A tag name that is a substring of a listed tag does not match."""
        d = classify_line("##[debug] msg")
        assert d.matches("debug")
        assert not d.matches("de")

    def test_parse_taglist_drops_empty_names(self):
        assert parse_taglist(" ,a,,b ") == frozenset({"a", "b"})


# ---------------------------------------------------------------------------
# parse_dump_payload()
# ---------------------------------------------------------------------------


class TestParseDumpPayload:
    def test_plain_tokens_name_themselves(self):
        assert parse_dump_payload("a b") == [
            DumpEntry("a", "a"),
            DumpEntry("b", "b"),
        ]

    def test_colon_and_equals_labels(self):
        assert parse_dump_payload("b:x, c=y.z") == [
            DumpEntry("b", "x"),
            DumpEntry("c", "y.z"),
        ]

    def test_mixed_separators(self):
        entries = parse_dump_payload("a,b , c,,  d")
        assert [e.name for e in entries] == ["a", "b", "c", "d"]

    def test_container_sigil_is_dropped(self):
        """'%y' dumps the live object y under the name y."""
        assert parse_dump_payload("a, b:x, %y") == [
            DumpEntry("a", "a"),
            DumpEntry("b", "x"),
            DumpEntry("y", "y"),
        ]

    def test_container_sigil_after_label(self):
        assert parse_dump_payload("rows:@data") == [DumpEntry("rows", "data")]

    def test_attribute_and_subscript_expressions_kept_verbatim(self):
        assert parse_dump_payload("obj.attr items[0]") == [
            DumpEntry("obj.attr", "obj.attr"),
            DumpEntry("items[0]", "items[0]"),
        ]

    def test_empty_label_expression_is_skipped(self):
        assert parse_dump_payload("a: b") == [DumpEntry("b", "b")]

    def test_empty_payload(self):
        assert parse_dump_payload("   ") == []
