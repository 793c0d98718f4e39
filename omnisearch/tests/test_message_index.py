"""Tests for message indexing and snippets."""

from omnisearch.engine.message_index import build_message_index, make_message_snippet
from omnisearch.engine.models import ConversationItem, IndexedMessage


class TestBuildMessageIndex:

    def test_indexes_only_message_items(self):
        """Reasoning and other item kinds are skipped."""
        indexed = build_message_index(
            ["thread-1"],
            {
                "thread-1": [
                    ConversationItem("m1", "message", "user", "hello world"),
                    ConversationItem("r1", "reasoning", None, "thinking"),
                ]
            },
        )

        assert indexed == [IndexedMessage(message_id="m1", thread_id="thread-1", text="hello world")]

    def test_trims_and_skips_blank_text(self):
        indexed = build_message_index(
            ["t"],
            {"t": [
                ConversationItem("m1", "message", "user", "   "),
                ConversationItem("m2", "message", "assistant", "  padded  "),
            ]},
        )

        assert [(m.message_id, m.text) for m in indexed] == [("m2", "padded")]

    def test_preserves_thread_then_item_order(self):
        items = {
            "a": [ConversationItem("a1", "message", "user", "one"),
                  ConversationItem("a2", "message", "user", "two")],
            "b": [ConversationItem("b1", "message", "user", "three")],
        }

        indexed = build_message_index(["b", "a", "missing"], items)

        assert [m.message_id for m in indexed] == ["b1", "a1", "a2"]


class TestMessageSnippet:

    def test_bounded_snippet_around_hit(self):
        """A snippet keeps the hit and stays within radius bounds."""
        snippet = make_message_snippet("abc def ghi jkl mno pqr", "ghi", 4)

        assert "ghi" in snippet
        assert len(snippet) <= 20
        assert snippet == "...def ghi jkl..."

    def test_no_ellipsis_when_window_covers_text(self):
        assert make_message_snippet("short hit", "hit") == "short hit"

    def test_case_insensitive_hit(self):
        snippet = make_message_snippet("x" * 60 + "NeEdLe", "needle", 5)
        assert snippet == "...xxxxxNeEdLe"

    def test_fallback_without_query_or_hit(self):
        """Missing query or hit returns the first 96 characters unmodified."""
        text = "z" * 200

        assert make_message_snippet(text, "") == "z" * 96
        assert make_message_snippet(text, "nope") == "z" * 96
        assert make_message_snippet("tiny", "nope") == "tiny"
