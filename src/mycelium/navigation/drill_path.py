"""Breadcrumb stack of focus roots."""

from collections.abc import Iterable, Iterator

from mycelium.models import ROOT_ID


class DrillPath:
    """
    Ordered node ids from the absolute root to the current focus root.

    Always starts with "root" and is never empty.
    """

    def __init__(self, ids: Iterable[str] | None = None) -> None:
        self._ids: list[str] = list(ids) if ids is not None else [ROOT_ID]
        if not self._ids or self._ids[0] != ROOT_ID:
            raise ValueError(f"Drill path must start with {ROOT_ID!r}: {self._ids}")

    @property
    def ids(self) -> tuple[str, ...]:
        return tuple(self._ids)

    @property
    def current(self) -> str:
        return self._ids[-1]

    def push(self, node_id: str) -> None:
        self._ids.append(node_id)

    def pop(self) -> str | None:
        """Remove and return the top entry; None if only the root is left."""
        if len(self._ids) <= 1:
            return None
        return self._ids.pop()

    def truncate(self, index: int) -> bool:
        """Keep entries [0..index] inclusive. Out-of-range index is ignored."""
        if index < 0 or index >= len(self._ids):
            return False
        del self._ids[index + 1:]
        return True

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._ids

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._ids))

    def __len__(self) -> int:
        return len(self._ids)

    def __repr__(self) -> str:
        return f"DrillPath({self._ids!r})"
