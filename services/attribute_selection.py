from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from utils.attributes import AttributeKey, parse_key

MIN_ATTRIBUTES = 2


@dataclass(frozen=True)
class AttributeSelection:
    """
    Ordered attribute keys plotted by one multi-attribute chart.
    Removal below `minimum` is a no-op; reordering is a pure permutation.
    """
    keys: Tuple[AttributeKey, ...]
    minimum: int = MIN_ATTRIBUTES

    def add(self, key: AttributeKey | str) -> "AttributeSelection":
        parsed = parse_key(key)
        if parsed is None or parsed in self.keys:
            return self
        return AttributeSelection(self.keys + (parsed,), self.minimum)

    def remove(self, key: AttributeKey | str) -> "AttributeSelection":
        parsed = parse_key(key)
        if parsed not in self.keys or len(self.keys) <= self.minimum:
            return self
        return AttributeSelection(tuple(k for k in self.keys if k != parsed), self.minimum)

    def move(self, src: int, dst: int) -> "AttributeSelection":
        """Move the key at index `src` to index `dst` (indices are clamped)."""
        n = len(self.keys)
        if n == 0:
            return self
        src = max(0, min(n - 1, src))
        dst = max(0, min(n - 1, dst))
        if src == dst:
            return self
        keys = list(self.keys)
        moved = keys.pop(src)
        keys.insert(dst, moved)
        return AttributeSelection(tuple(keys), self.minimum)

    def shift(self, key: AttributeKey | str, offset: int) -> "AttributeSelection":
        """Move `key` left (negative) or right (positive) by `offset` slots."""
        parsed = parse_key(key)
        if parsed not in self.keys:
            return self
        i = self.keys.index(parsed)
        return self.move(i, i + offset)

    def sync(self, wanted: Iterable[AttributeKey | str]) -> "AttributeSelection":
        """
        Apply a multi-select value: additions in the order given, then removals
        (each honouring the minimum, so a short list keeps earlier keys).
        """
        wanted_keys = [k for k in (parse_key(w) for w in wanted) if k is not None]
        out = self
        for k in wanted_keys:
            out = out.add(k)
        for k in self.keys:
            if k not in wanted_keys:
                out = out.remove(k)
        return out

    def to_store(self) -> List[str]:
        return [k.value for k in self.keys]

    @classmethod
    def from_store(cls, data: Optional[Iterable[str]], default: Iterable[AttributeKey]) -> "AttributeSelection":
        keys: List[AttributeKey] = []
        for raw in data or []:
            k = parse_key(raw)
            if k is not None and k not in keys:
                keys.append(k)
        if len(keys) < MIN_ATTRIBUTES:
            keys = list(default)
        return cls(tuple(keys))


# Initial selections per chart
PARALLEL_DEFAULT = (
    AttributeKey.GDP_PER_CAPITA,
    AttributeKey.ELECTRICITY_CAPACITY,
    AttributeKey.INTERNET_USERS,
    AttributeKey.CO2_PER_CAPITA,
)

SCATTER_MATRIX_DEFAULT = (
    AttributeKey.GDP_PER_CAPITA,
    AttributeKey.INTERNET_USERS,
    AttributeKey.CO2_PER_CAPITA,
)
