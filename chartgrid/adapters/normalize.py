from __future__ import annotations

from collections.abc import Mapping, Sequence
from decimal import Decimal
from itertools import zip_longest
import math
import numbers
from typing import Any

import numpy as np

from chartgrid.errors import PlotDataError
from chartgrid.series import Label, NormalizedData


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


def normalize_series(data: Any) -> NormalizedData:
    """Turn one series or a list of series into aligned labels and per-series mappings.

    A series is a sequence of ``(label, value)`` pairs, a mapping of label to
    value, a pandas Series (index as labels) or an ``(n, 2)`` array/tensor. A
    pandas DataFrame contributes one series per column.
    """
    raw_series = _split_series(data)

    columns: list[list[Label]] = []
    mappings: list[dict[Label, Any]] = []
    greatest: Any = 0
    for s_idx, raw in enumerate(raw_series):
        set_columns: list[Label] = []
        set_data: dict[Label, Any] = {}
        for p_idx, (label, value) in enumerate(_iter_points(raw, series_index=s_idx)):
            value = _coerce_value(value, series_index=s_idx, point_index=p_idx)
            set_data[label] = value
            set_columns.append(label)
            if value is not None:
                greatest = max(greatest, value)
        columns.append(set_columns)
        mappings.append(set_data)

    labels = _merge_labels(columns)
    return NormalizedData(labels=labels, series=tuple(mappings), max_value=greatest)


def _split_series(data: Any) -> list[Any]:
    if data is None:
        return []
    if pd is not None and isinstance(data, pd.DataFrame):
        return [data[col] for col in data.columns]
    if torch is not None and isinstance(data, torch.Tensor):
        data = data.detach().cpu().numpy()
    if isinstance(data, np.ndarray):
        if data.ndim == 3:
            return [data[i] for i in range(data.shape[0])]
        return [data]
    if _is_series(data) and not isinstance(data, Sequence):
        return [data]
    if isinstance(data, Sequence) and not isinstance(data, (str, bytes, bytearray)):
        if len(data) == 0:
            return []
        if _is_series(data[0]):
            return list(data)
        return [data]
    raise PlotDataError(f"unsupported series input type: {type(data)!r}")


def _is_series(item: Any) -> bool:
    if isinstance(item, Mapping):
        return True
    if pd is not None and isinstance(item, pd.Series):
        return True
    if torch is not None and isinstance(item, torch.Tensor):
        return item.ndim == 2
    if isinstance(item, np.ndarray):
        return item.ndim == 2
    if isinstance(item, Sequence) and not isinstance(item, (str, bytes, bytearray)):
        # A list of pairs, not a pair whose label is itself a sequence.
        return all(_is_pair(point) for point in item)
    return False


def _is_pair(point: Any) -> bool:
    if isinstance(point, np.ndarray):
        return point.ndim == 1 and point.shape[0] == 2
    return isinstance(point, Sequence) and not isinstance(point, (str, bytes, bytearray)) and len(point) == 2


def _iter_points(raw: Any, *, series_index: int):
    if isinstance(raw, Mapping):
        yield from raw.items()
        return
    if pd is not None and isinstance(raw, pd.Series):
        yield from zip(raw.index.tolist(), raw.tolist())
        return
    if torch is not None and isinstance(raw, torch.Tensor):
        raw = raw.detach().cpu().numpy()
    if isinstance(raw, np.ndarray):
        if raw.ndim != 2 or raw.shape[1] != 2:
            raise PlotDataError(f"series {series_index} array must have shape (n, 2), got {raw.shape}")
        raw = raw.tolist()
    for p_idx, point in enumerate(raw):
        if isinstance(point, np.ndarray):
            point = point.tolist()
        if not isinstance(point, Sequence) or isinstance(point, (str, bytes, bytearray)) or len(point) != 2:
            raise PlotDataError(f"series {series_index} point {p_idx} is not a (label, value) pair: {point!r}")
        yield point[0], point[1]


def _coerce_value(value: Any, *, series_index: int, point_index: int) -> Any:
    if value is None:
        return None
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, Decimal):
        return None if value.is_nan() else value
    if not isinstance(value, numbers.Real):
        raise PlotDataError(f"series {series_index} point {point_index} has non-numeric value: {value!r}")
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


def _merge_labels(columns: list[list[Label]]) -> tuple[Label, ...]:
    seen: dict[Label, None] = {}
    # Round-robin by position so aligned series keep their shared column order.
    for row in zip_longest(*columns):
        for label in row:
            if label is not None and label not in seen:
                seen[label] = None
    labels = list(seen)
    if labels and not any(isinstance(label, (str, bytes)) for label in labels):
        try:
            labels = sorted(labels)
        except TypeError:
            pass
    return tuple(labels)
