from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional


class Emphasis(str, Enum):
    """How a chart draws one record; ordered strongest first."""
    ACTIVE      = "active"
    HIGHLIGHTED = "highlighted"
    FADED       = "faded"
    DEFAULT     = "default"


@dataclass(frozen=True)
class HighlightState:
    """
    Shared selection state read by every chart.
    - highlighted: set of record ids (brushed / multi-selected)
    - active_id:   most recently focused record, independent of the set
    Every operation returns a new state; nothing is mutated in place.
    """
    highlighted: FrozenSet[str] = frozenset()
    active_id: Optional[str] = None

    def toggle_highlight(self, record_id: str) -> "HighlightState":
        if record_id in self.highlighted:
            return replace(self, highlighted=self.highlighted - {record_id})
        return replace(self, highlighted=self.highlighted | {record_id})

    def set_highlight_set(self, ids: Iterable[str]) -> "HighlightState":
        return replace(self, highlighted=frozenset(ids))

    def merge_highlight(self, ids: Iterable[str]) -> "HighlightState":
        """Union `ids` into the current set (select-all-visible, box-select)."""
        return self.set_highlight_set(self.highlighted | frozenset(ids))

    def set_active(self, record_id: Optional[str]) -> "HighlightState":
        return replace(self, active_id=record_id)

    def clear_all(self) -> "HighlightState":
        return HighlightState()

    @property
    def is_empty(self) -> bool:
        return not self.highlighted and self.active_id is None

    def emphasis(self, record_id: str) -> Emphasis:
        return classify_emphasis(record_id, self)

    # ---------- Store (JSON) round-trip ----------

    def to_store(self) -> Dict[str, Any]:
        # sorted for a stable payload; order carries no meaning
        return {"highlighted": sorted(self.highlighted), "active_id": self.active_id}

    @classmethod
    def from_store(cls, data: Optional[Mapping[str, Any]]) -> "HighlightState":
        if not data:
            return cls()
        return cls(
            highlighted=frozenset(data.get("highlighted") or []),
            active_id=data.get("active_id"),
        )


def classify_emphasis(record_id: str, state: HighlightState) -> Emphasis:
    """
    Rendering precedence shared by all charts:
      1) active id                          -> ACTIVE
      2) set non-empty and contains id      -> HIGHLIGHTED
      3) set non-empty and does not contain -> FADED
      4) otherwise                          -> DEFAULT
    """
    if state.active_id is not None and record_id == state.active_id:
        return Emphasis.ACTIVE
    if state.highlighted:
        return Emphasis.HIGHLIGHTED if record_id in state.highlighted else Emphasis.FADED
    return Emphasis.DEFAULT
