"""
Pytest tests for the active-tab store.
"""

from __future__ import annotations

import pytest

from backend_lingua.services import NavTab, TabSelectionStore


def test_subscribe_receives_current_tab_immediately():
    store = TabSelectionStore()
    seen = []
    store.subscribe(seen.append)
    assert seen == [NavTab.SEARCH]


def test_set_active_notifies_subscribers_in_order():
    store = TabSelectionStore()
    first, second = [], []
    store.subscribe(first.append)
    store.subscribe(second.append)
    store.set_active("chats")
    assert store.active is NavTab.CHATS
    assert first == [NavTab.SEARCH, NavTab.CHATS]
    assert second == [NavTab.SEARCH, NavTab.CHATS]


def test_unsubscribe_stops_notifications():
    store = TabSelectionStore()
    seen = []
    unsubscribe = store.subscribe(seen.append)
    unsubscribe()
    unsubscribe()
    store.set_active(NavTab.PROFILE)
    assert seen == [NavTab.SEARCH]


def test_listener_may_unsubscribe_during_notify():
    store = TabSelectionStore()
    seen = []
    handle = {}

    def once(tab):
        seen.append(tab)
        if tab is NavTab.CHATS:
            handle["unsub"]()

    handle["unsub"] = store.subscribe(once)
    store.set_active(NavTab.CHATS)
    store.set_active(NavTab.PROFILE)
    assert seen == [NavTab.SEARCH, NavTab.CHATS]


def test_stores_are_independent():
    a, b = TabSelectionStore(), TabSelectionStore(initial="profile")
    a.set_active("chats")
    assert b.active is NavTab.PROFILE


def test_unknown_tab_rejected():
    store = TabSelectionStore()
    with pytest.raises(ValueError):
        store.set_active("settings")
    assert store.active is NavTab.SEARCH
