"""Text rendering of allocation counts in name or count order."""

from __future__ import annotations

import os
from typing import Callable, Iterable, Literal

from weaktrack.tracking.schemas import CountEntry

ReportOrder = Literal["name", "count"]


def by_name(entry: CountEntry) -> str:
    return entry.type_key


def by_count(entry: CountEntry) -> tuple[int, str]:
    """Ascending count; Python ints never wrap, so large counts order correctly.

    Equal counts fall back to the type key to keep reports reproducible.
    """

    return (entry.count, entry.type_key)


ORDERINGS: dict[str, Callable[[CountEntry], object]] = {
    "name": by_name,
    "count": by_count,
}


def sort_entries(entries: Iterable[CountEntry], order: ReportOrder) -> list[CountEntry]:
    try:
        key = ORDERINGS[order]
    except KeyError:
        raise ValueError(f"Unknown report order '{order}'") from None
    return sorted(entries, key=key)  # type: ignore[arg-type]


def format_lines(sorted_entries: Iterable[CountEntry], order: ReportOrder) -> str:
    """Render entries already in report order, without sorting them again."""

    if order == "count":
        return "".join(f"{entry.count} -> {entry.type_key}{os.linesep}" for entry in sorted_entries)
    return "".join(f"{entry.type_key} -> {entry.count}{os.linesep}" for entry in sorted_entries)


def render_by_name(entries: Iterable[CountEntry]) -> str:
    """Render ``key -> count`` lines sorted by type key."""

    return format_lines(sort_entries(entries, "name"), "name")


def render_by_count(entries: Iterable[CountEntry]) -> str:
    """Render ``count -> key`` lines sorted by ascending count."""

    return format_lines(sort_entries(entries, "count"), "count")
