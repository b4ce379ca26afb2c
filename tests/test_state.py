"""Tests for the AppState transition functions."""

from __future__ import annotations

import copy

import pytest

from reddit_browser.errors import FetchError
from reddit_browser.events import Action
from reddit_browser.models import Size, UserConfig, ViewMode
from reddit_browser.state import (
    AppState,
    TransitionResult,
    apply_action,
    back,
    clear_selection,
    confirm,
    move_down,
    move_up,
    refresh,
    refresh_due,
    snapshot,
)


def _state_with(items, cursor=None, **kwargs) -> AppState:
    state = AppState(**kwargs)
    state.feed.replace(items)
    state.feed.select(cursor)
    return state


def _assert_invariant(state: AppState) -> None:
    assert (state.selected_detail is not None) == (state.mode is ViewMode.DETAIL)


class TestInitialState:
    def test_defaults(self):
        state = AppState()
        assert state.mode is ViewMode.LIST
        assert len(state.feed) == 0
        assert state.feed.cursor is None
        assert state.selected_detail is None
        assert state.last_refresh is None
        assert state.populate_threshold == 10
        assert state.fetch_window == 25

    def test_from_config(self):
        config = UserConfig(fetch_window=40, populate_threshold=5, refresh_interval_seconds=7.5)
        state = AppState.from_config(config)
        assert state.fetch_window == 40
        assert state.populate_threshold == 5
        assert state.refresh_interval == 7.5


class TestNavigation:
    def test_move_down_and_up(self, make_items):
        state = _state_with(make_items(3), cursor=0)
        assert move_down(state) is TransitionResult.CHANGED
        assert state.feed.cursor == 1
        assert move_up(state) is TransitionResult.CHANGED
        assert state.feed.cursor == 0

    def test_move_on_empty_feed_is_unchanged(self):
        state = AppState()
        assert move_down(state) is TransitionResult.UNCHANGED
        assert move_up(state) is TransitionResult.UNCHANGED
        assert state.feed.cursor is None

    def test_clear_selection(self, make_items):
        state = _state_with(make_items(3), cursor=2)
        assert clear_selection(state) is TransitionResult.CHANGED
        assert state.feed.cursor is None
        assert clear_selection(state) is TransitionResult.UNCHANGED

    def test_navigation_ignored_in_detail_mode(self, make_items, make_detail):
        state = _state_with(make_items(3), cursor=1)
        state.mode = ViewMode.DETAIL
        state.selected_detail = make_detail(id="p1")
        assert move_down(state) is TransitionResult.UNCHANGED
        assert move_up(state) is TransitionResult.UNCHANGED
        assert clear_selection(state) is TransitionResult.UNCHANGED
        assert state.feed.cursor == 1


class TestConfirm:
    async def test_confirm_without_selection_is_noop(self, make_items, make_feed_client):
        state = _state_with(make_items(3))
        client = make_feed_client()
        before = snapshot(state, Size(80, 24))

        result = await confirm(state, client)

        assert result is TransitionResult.UNCHANGED
        assert snapshot(state, Size(80, 24)) == before
        assert client.detail_calls == []

    async def test_confirm_on_empty_feed_is_noop(self, make_feed_client):
        state = AppState()
        client = make_feed_client()

        result = await apply_action(state, Action.CONFIRM, client)

        assert result is TransitionResult.UNCHANGED
        assert state.mode is ViewMode.LIST
        assert client.detail_calls == []

    async def test_confirm_fetches_selected_item_detail(
        self, make_item, make_detail, make_feed_client
    ):
        items = [make_item(id=f"id{i}") for i in range(5)]
        items[2] = make_item(id="abc")
        state = _state_with(items, cursor=2)
        client = make_feed_client(details={"abc": make_detail(id="abc", body="hello")})

        result = await confirm(state, client)

        assert result is TransitionResult.CHANGED
        assert client.detail_calls == ["abc"]
        assert state.mode is ViewMode.DETAIL
        assert state.selected_detail is not None
        assert state.selected_detail.body == "hello"
        _assert_invariant(state)

    async def test_failed_detail_fetch_stays_in_list(self, make_items, make_feed_client):
        state = _state_with(make_items(3), cursor=0)
        client = make_feed_client(details={"p0": FetchError("boom", status_code=503)})

        result = await confirm(state, client)

        assert result is TransitionResult.FAILED
        assert state.mode is ViewMode.LIST
        assert state.selected_detail is None
        assert state.feed.cursor == 0

    async def test_confirm_in_detail_mode_is_noop(self, make_items, make_detail, make_feed_client):
        state = _state_with(make_items(3), cursor=0)
        detail = make_detail(id="p0")
        state.mode = ViewMode.DETAIL
        state.selected_detail = detail
        client = make_feed_client(details={"p0": make_detail(id="p0", body="other")})

        result = await confirm(state, client)

        assert result is TransitionResult.UNCHANGED
        assert state.selected_detail is detail
        assert client.detail_calls == []


class TestBack:
    @pytest.mark.parametrize("body", ["", "hello", "x" * 5000])
    def test_back_returns_to_list(self, make_items, make_detail, body):
        state = _state_with(make_items(2), cursor=1)
        state.mode = ViewMode.DETAIL
        state.selected_detail = make_detail(id="p1", body=body)

        assert back(state) is TransitionResult.CHANGED
        assert state.mode is ViewMode.LIST
        assert state.selected_detail is None
        assert state.feed.cursor == 1
        _assert_invariant(state)

    def test_back_in_list_mode_is_noop(self, make_items):
        state = _state_with(make_items(2), cursor=0)
        assert back(state) is TransitionResult.UNCHANGED
        assert state.mode is ViewMode.LIST


class TestRefresh:
    async def test_first_refresh_populates_and_selects_first(self, make_items, make_feed_client):
        state = AppState()
        client = make_feed_client([make_items(25)])

        result = await refresh(state, client, now=50.0)

        assert result is TransitionResult.CHANGED
        assert client.top_calls == [25]
        assert len(state.feed) == 25
        assert state.feed.cursor == 0
        assert state.last_refresh == 50.0

    async def test_refresh_above_threshold_never_fetches(self, make_items, make_feed_client):
        state = _state_with(make_items(12), cursor=4, last_refresh=0.0)
        client = make_feed_client([make_items(25)])

        for now in (0.0, 5.0, 10_000.0):
            assert await refresh(state, client, now=now) is TransitionResult.UNCHANGED

        assert client.top_calls == []
        assert state.feed.cursor == 4

    async def test_refresh_is_debounced_by_interval(self, make_items, make_feed_client):
        state = _state_with(make_items(3), cursor=0, last_refresh=100.0, refresh_interval=2.0)
        client = make_feed_client([make_items(25)])

        result = await refresh(state, client, now=101.5)

        assert result is TransitionResult.UNCHANGED
        assert client.top_calls == []
        assert len(state.feed) == 3

    async def test_refresh_after_interval_fetches(self, make_items, make_feed_client):
        state = _state_with(make_items(3), cursor=2, last_refresh=100.0, refresh_interval=2.0)
        client = make_feed_client([make_items(25, prefix="n")])

        result = await refresh(state, client, now=102.0)

        assert result is TransitionResult.CHANGED
        assert state.feed.items[0].id == "n0"
        assert state.feed.cursor == 0

    async def test_failed_refresh_leaves_items_identical(self, make_items, make_feed_client):
        state = _state_with(make_items(3), cursor=1, last_refresh=0.0, refresh_interval=1.0)
        before_items = copy.deepcopy(state.feed.items)
        client = make_feed_client([FetchError("timeout")])

        result = await refresh(state, client, now=10.0)

        assert result is TransitionResult.FAILED
        assert client.top_calls == [25]
        assert state.feed.items == before_items
        assert state.feed.cursor == 1
        assert state.last_refresh == 0.0

    async def test_failed_refresh_retries_on_next_tick(self, make_items, make_feed_client):
        state = AppState(refresh_interval=1.0)
        client = make_feed_client([FetchError("down"), make_items(25)])

        assert await refresh(state, client, now=1.0) is TransitionResult.FAILED
        assert await refresh(state, client, now=2.0) is TransitionResult.CHANGED
        assert client.top_calls == [25, 25]
        assert len(state.feed) == 25

    async def test_short_result_keeps_refreshing(self, make_items, make_feed_client):
        state = AppState(refresh_interval=1.0)
        client = make_feed_client([make_items(4), make_items(25)])

        await refresh(state, client, now=1.0)
        assert len(state.feed) == 4
        assert refresh_due(state, now=2.0)
        await refresh(state, client, now=2.0)
        assert len(state.feed) == 25
        assert not refresh_due(state, now=100.0)

    async def test_empty_result_leaves_no_selection(self, make_feed_client):
        state = AppState()
        client = make_feed_client([[]])

        result = await refresh(state, client, now=1.0)

        assert result is TransitionResult.CHANGED
        assert state.feed.cursor is None
        assert state.last_refresh == 1.0

    async def test_refresh_suppressed_in_detail_mode(
        self, make_items, make_detail, make_feed_client
    ):
        state = _state_with(make_items(2), cursor=0)
        state.mode = ViewMode.DETAIL
        state.selected_detail = make_detail(id="p0")
        client = make_feed_client([make_items(25)])

        assert not refresh_due(state, now=1e9)
        assert await refresh(state, client, now=1e9) is TransitionResult.UNCHANGED
        assert client.top_calls == []
        assert len(state.feed) == 2
        _assert_invariant(state)

    async def test_refresh_uses_fetch_window(self, make_items, make_feed_client):
        state = AppState(fetch_window=7, populate_threshold=5)
        client = make_feed_client([make_items(30)])

        await refresh(state, client, now=1.0)

        assert client.top_calls == [7]
        assert len(state.feed) == 7


class TestApplyAction:
    async def test_quit(self, make_feed_client):
        assert await apply_action(AppState(), Action.QUIT, make_feed_client()) is (
            TransitionResult.QUIT
        )

    @pytest.mark.parametrize("action", [Action.RESIZE, Action.IGNORED])
    async def test_passive_actions_do_not_touch_state(self, action, make_items, make_feed_client):
        state = _state_with(make_items(3), cursor=1)
        before = snapshot(state, Size(80, 24))

        result = await apply_action(state, action, make_feed_client())

        assert result is TransitionResult.UNCHANGED
        assert snapshot(state, Size(80, 24)) == before

    async def test_dispatches_navigation(self, make_items, make_feed_client):
        state = _state_with(make_items(3))
        client = make_feed_client()
        await apply_action(state, Action.MOVE_DOWN, client)
        await apply_action(state, Action.MOVE_DOWN, client)
        assert state.feed.cursor == 1
        await apply_action(state, Action.MOVE_UP, client)
        assert state.feed.cursor == 0
        await apply_action(state, Action.CLEAR_SELECTION, client)
        assert state.feed.cursor is None

    async def test_full_open_and_back_cycle(self, make_items, make_detail, make_feed_client):
        state = _state_with(make_items(3), cursor=0)
        client = make_feed_client(details={"p1": make_detail(id="p1", body="second")})

        await apply_action(state, Action.MOVE_DOWN, client)
        await apply_action(state, Action.CONFIRM, client)
        assert state.mode is ViewMode.DETAIL
        assert state.selected_detail.body == "second"

        await apply_action(state, Action.BACK, client)
        assert state.mode is ViewMode.LIST
        assert state.feed.cursor == 1
        _assert_invariant(state)


def test_snapshot_is_read_only_view(make_items):
    state = _state_with(make_items(3), cursor=2, last_refresh=5.0)
    snap = snapshot(state, Size(120, 40))

    assert snap.mode is ViewMode.LIST
    assert snap.items == state.feed.items
    assert snap.cursor == 2
    assert snap.selected_item == state.feed.items[2]
    assert snap.size == Size(120, 40)
    assert snap.last_refresh == 5.0

    with pytest.raises(AttributeError):
        snap.cursor = 0  # type: ignore[misc]
