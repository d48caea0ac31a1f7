"""Regex filtering of the session dataset.

Results are index views over the original dataset: filtering never copies
line text, and every recomputation scans the full dataset from the top.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from .errors import QueryPatternError


class FilteredView(Sequence[str]):
    """Ordered subset of a dataset, addressed by dataset indices."""

    __slots__ = ("_dataset", "_indices")

    def __init__(self, dataset: Sequence[str], indices: Sequence[int]) -> None:
        self._dataset = dataset
        self._indices = indices

    @classmethod
    def identity(cls, dataset: Sequence[str]) -> FilteredView:
        return cls(dataset, range(len(dataset)))

    @property
    def indices(self) -> Sequence[int]:
        return self._indices

    def __len__(self) -> int:
        return len(self._indices)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return [self._dataset[i] for i in self._indices[index]]
        return self._dataset[self._indices[index]]

    def __iter__(self):
        dataset = self._dataset
        for i in self._indices:
            yield dataset[i]

    def __repr__(self) -> str:
        return f"FilteredView({len(self)}/{len(self._dataset)} lines)"


def compile_query(query: str) -> re.Pattern[str]:
    """Compile ``query`` as a case-sensitive regular expression.

    Oversized repeat counts and pathologically deep nesting make the ``re``
    compiler raise ``OverflowError`` or ``RecursionError`` instead of
    ``re.error``; all three are reported as ``QueryPatternError``.
    """
    try:
        return re.compile(query)
    except re.error as exc:
        raise QueryPatternError(query, str(exc)) from exc
    except OverflowError as exc:
        raise QueryPatternError(query, str(exc) or "repeat count too large") from exc
    except RecursionError as exc:
        raise QueryPatternError(query, "pattern nested too deeply") from exc


def filter_lines(dataset: Sequence[str], query: str) -> FilteredView:
    """Return dataset lines containing a match for ``query``, in dataset order.

    An empty query selects every line. Raises ``QueryPatternError`` when the
    query is not a valid pattern.
    """
    if not query:
        return FilteredView.identity(dataset)
    search = compile_query(query).search
    return FilteredView(dataset, [idx for idx, line in enumerate(dataset) if search(line)])
