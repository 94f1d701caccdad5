from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Hashable, Literal


Label = Hashable
XAxisMode = Literal["normal", "time"]
X_AXIS_MODES: tuple[str, ...] = ("normal", "time")


@dataclass(frozen=True)
class NormalizedData:
    labels: tuple[Label, ...]
    series: tuple[dict[Label, Any], ...]
    max_value: float

    @property
    def label_count(self) -> int:
        return len(self.labels)

    def values_for(self, label: Label) -> tuple[Any, ...]:
        """Value of ``label`` in every series, ``None`` where a series has no point."""
        return tuple(s.get(label) for s in self.series)
