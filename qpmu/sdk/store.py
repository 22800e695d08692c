"""Maps the IDs of list items sent to the launcher back to their callbacks."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Any

from qpmu.sdk.items import List, ListItemCallbacks


@dataclass(frozen=True)
class _QueryStore:
    """Callbacks of one non-empty query, whose item IDs are contiguous."""

    callbacks: tuple[ListItemCallbacks, ...]
    first_id: int

    def callback_of_id(self, item_id: int) -> ListItemCallbacks | None:
        offset = item_id - self.first_id
        if 0 <= offset < len(self.callbacks):
            return self.callbacks[offset]
        return None


class ListItemStore:
    """Keeps the callbacks of every query answered so far.

    Older queries are only dropped when an item of a newer one is fetched,
    since a slow launcher may still activate items it has already shown.
    """

    def __init__(self) -> None:
        self._queries: deque[_QueryStore] = deque()
        self._next_id = 0

    def _fetch_ids(self, count: int) -> range:
        ids = range(self._next_id, self._next_id + count)
        self._next_id += count
        return ids

    def store_query_result(self, result: List) -> dict[str, Any]:
        """Store the callbacks of ``result`` and return the reply for the launcher."""
        style = result.style.to_dict() if result.style is not None else None
        if not result.items:
            return {"items": [], "list_style": style}

        ids = self._fetch_ids(len(result.items))
        items = [
            {
                "id": item_id,
                "title": item.title,
                "description": item.description,
                "icon": item.icon.to_dict() if item.icon is not None else None,
            }
            for item_id, item in zip(ids, result.items)
        ]
        self._queries.append(
            _QueryStore(tuple(item.callbacks for item in result.items), ids.start)
        )
        return {"items": items, "list_style": style}

    def fetch_callbacks_of(self, item_id: int) -> ListItemCallbacks | None:
        """Find the callbacks of ``item_id``, dropping every older query."""
        found = next(
            (
                (index, callbacks)
                for index, query in enumerate(self._queries)
                if (callbacks := query.callback_of_id(item_id)) is not None
            ),
            None,
        )
        if found is None:
            return None
        index, callbacks = found
        # The query itself stays: another of its items may still be activated.
        for _ in range(index):
            self._queries.popleft()
        return callbacks