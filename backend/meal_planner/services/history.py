"""Bounded conversation history sent to the model as context."""

from __future__ import annotations

from typing import Iterable, Optional

from meal_planner.models.meals import HistoryEntry

# Keep the last 6 exchanges (user + assistant each)
MAX_HISTORY_ENTRIES = 12
# Only the last 2 exchanges are rendered into the prompt
CONTEXT_ENTRIES = 4


class ConversationHistory:
    """Ordered user/assistant turns owned by one client session.

    Instances are treated as values: ``with_exchange`` returns a new
    history, so a request can hand one in and get the updated one back
    without touching shared state.
    """

    def __init__(self, entries: Optional[Iterable[HistoryEntry]] = None):
        self._entries: tuple[HistoryEntry, ...] = tuple(entries or ())

    @classmethod
    def from_wire(cls, entries: Optional[Iterable[dict | HistoryEntry]]) -> "ConversationHistory":
        if not entries:
            return cls()
        return cls(
            e if isinstance(e, HistoryEntry) else HistoryEntry.model_validate(e)
            for e in entries
        )

    @property
    def entries(self) -> list[HistoryEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConversationHistory):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"ConversationHistory({len(self._entries)} entries)"

    def build_input(self, prompt: str) -> str:
        """Render recent turns plus the new prompt as the model input."""
        if not self._entries:
            return prompt

        recent = self._entries[-CONTEXT_ENTRIES:]
        history_text = "\n\n".join(f"{e.role}: {e.content}" for e in recent)
        return f"{history_text}\n\nuser: {prompt}"

    def with_exchange(self, user_content: str, assistant_content: str) -> "ConversationHistory":
        """Append one exchange, dropping the oldest entries past the cap."""
        entries = self._entries + (
            HistoryEntry(role="user", content=user_content),
            HistoryEntry(role="assistant", content=assistant_content),
        )
        return ConversationHistory(entries[-MAX_HISTORY_ENTRIES:])

    def to_list(self) -> list[dict]:
        return [e.model_dump() for e in self._entries]
