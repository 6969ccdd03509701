"""
Active-tab store for one application session.

subscribe() calls the listener right away with the current tab and returns an
unsubscribe callable; set_active() notifies the current subscribers synchronously.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable


class NavTab(str, Enum):
    SEARCH = "search"
    CHATS = "chats"
    PROFILE = "profile"


Listener = Callable[[NavTab], None]


class TabSelectionStore:
    def __init__(self, initial: NavTab | str = NavTab.SEARCH) -> None:
        self._active = NavTab(initial)
        self._listeners: list[Listener] = []

    @property
    def active(self) -> NavTab:
        return self._active

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)
        listener(self._active)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_active(self, tab: NavTab | str) -> None:
        """Raises ValueError for an unknown tab."""
        self._active = NavTab(tab)
        # Copy so listeners may unsubscribe while being notified
        for listener in list(self._listeners):
            listener(self._active)
