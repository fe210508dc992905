"""
Unit tests for the bounded conversation history.
"""

import pytest

from meal_planner.models.meals import HistoryEntry
from meal_planner.services.history import (
    CONTEXT_ENTRIES,
    MAX_HISTORY_ENTRIES,
    ConversationHistory,
)


def history_of(exchanges: int) -> ConversationHistory:
    history = ConversationHistory()
    for i in range(exchanges):
        history = history.with_exchange(f"prompt {i}", f"answer {i}")
    return history


class TestBuildInput:
    """Tests for rendering history into the model input."""

    @pytest.mark.unit
    def test_empty_history_is_prompt_alone(self):
        assert ConversationHistory().build_input("Plan dinners") == "Plan dinners"

    @pytest.mark.unit
    def test_renders_roles_and_blank_lines(self):
        history = history_of(1)
        assert history.build_input("Make Tuesday vegetarian") == (
            "user: prompt 0\n\nassistant: answer 0\n\nuser: Make Tuesday vegetarian"
        )

    @pytest.mark.unit
    def test_only_recent_entries_are_rendered(self):
        history = history_of(3)
        text = history.build_input("next")

        assert "prompt 0" not in text
        assert "answer 0" not in text
        assert text.startswith("user: prompt 1")
        assert text.count("\n\n") == CONTEXT_ENTRIES
        assert text.endswith("user: next")


class TestWithExchange:
    """Tests for appending and capping history."""

    @pytest.mark.unit
    def test_appends_user_then_assistant(self):
        history = ConversationHistory().with_exchange("hi", "{}")
        assert history.to_list() == [
            {"role": "user", "content": "hi"},
            {"role": "assistant", "content": "{}"},
        ]

    @pytest.mark.unit
    def test_returns_new_instance(self):
        original = ConversationHistory()
        updated = original.with_exchange("hi", "{}")
        assert len(original) == 0
        assert len(updated) == 2

    @pytest.mark.unit
    def test_capped_at_max_entries(self):
        history = history_of(7)
        assert len(history) == MAX_HISTORY_ENTRIES
        assert history.entries[0].content == "prompt 1"
        assert history.entries[-1].content == "answer 6"

    @pytest.mark.unit
    def test_cap_applies_to_oversized_input(self):
        entries = [HistoryEntry(role="user", content=str(i)) for i in range(20)]
        history = ConversationHistory(entries).with_exchange("a", "b")
        assert len(history) == MAX_HISTORY_ENTRIES
        assert history.entries[-2].content == "a"


class TestFromWire:
    """Tests for building history from request bodies."""

    @pytest.mark.unit
    def test_none_is_empty(self):
        assert len(ConversationHistory.from_wire(None)) == 0

    @pytest.mark.unit
    def test_accepts_dicts_and_models(self):
        history = ConversationHistory.from_wire([
            {"role": "user", "content": "a"},
            HistoryEntry(role="assistant", content="b"),
        ])
        assert [e.role for e in history.entries] == ["user", "assistant"]

    @pytest.mark.unit
    def test_equality(self):
        assert history_of(2) == history_of(2)
        assert history_of(2) != history_of(1)
