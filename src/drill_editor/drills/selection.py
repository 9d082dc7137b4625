"""Selection of elements within the active frame."""

from typing import Iterable, Iterator


class Selection:
    """Ordered set of element ids scoped to the active frame.

    The document keeps it consistent: ids of removed elements are discarded
    and the selection is cleared whenever the active frame changes.
    """

    def __init__(self) -> None:
        self._ids: dict[str, None] = {}

    def __contains__(self, element_id: object) -> bool:
        return element_id in self._ids

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._ids))

    def __len__(self) -> int:
        return len(self._ids)

    def __bool__(self) -> bool:
        return bool(self._ids)

    def __repr__(self) -> str:
        return f"Selection({list(self._ids)!r})"

    @property
    def ids(self) -> list[str]:
        """Selected ids in selection order."""
        return list(self._ids)

    def replace(self, ids: Iterable[str]) -> None:
        """Replace the selection."""
        self._ids = dict.fromkeys(ids)

    def add(self, element_id: str) -> None:
        """Add an id, keeping existing members."""
        self._ids.setdefault(element_id, None)

    def extend(self, ids: Iterable[str]) -> None:
        """Add several ids."""
        for element_id in ids:
            self.add(element_id)

    def toggle(self, element_id: str) -> bool:
        """Toggle membership. Returns True if the id is selected afterwards."""
        if element_id in self._ids:
            del self._ids[element_id]
            return False
        self._ids[element_id] = None
        return True

    def discard(self, element_id: str) -> None:
        """Remove an id if present."""
        self._ids.pop(element_id, None)

    def clear(self) -> None:
        """Deselect everything."""
        self._ids.clear()
