"""Tests for the calendar controller."""

import datetime
import json

import pytest

from calendar_grid import CalendarCell
from config import EVENTS_KEY
from controller import (
    MSG_CONFIRM_DELETE,
    MSG_ENTER_DESCRIPTION,
    MSG_NO_EVENTS,
    MSG_NO_SELECTION,
    MSG_SAVE_FAILED,
    MSG_SELECT_DATE,
    CalendarController,
    ViewState,
)
from storage import EventStore, MemoryStorage, StorageError

from .conftest import TODAY, FakePrompts, FakeView


def find_cell(view: FakeView, key: str, current: bool = True) -> CalendarCell:
    for grid_cell in view.last["cells"]:
        if grid_cell.cell.date_key == key and grid_cell.cell.is_current_month == current:
            return grid_cell.cell
    raise AssertionError(f"{key} not displayed")


def stored_events(storage: MemoryStorage) -> dict:
    return json.loads(storage.get_item(EVENTS_KEY))


class FailingStorage(MemoryStorage):
    """Storage that cannot be written."""

    def set_item(self, key: str, value: str) -> None:
        raise StorageError("disk full")


def test_view_state_shift() -> None:
    """Test the view state moves across years."""
    state = ViewState.for_today(datetime.date(2024, 1, 20))
    assert (state.year, state.month_index, state.selected) == (2024, 0, None)
    state.shift(-1)
    assert (state.year, state.month_index) == (2023, 11)
    state.shift(2)
    assert (state.year, state.month_index) == (2024, 1)


def test_start(controller: CalendarController, view: FakeView) -> None:
    """Test the initial render shows today's month and no selection."""
    assert len(view.renders) == 1
    last = view.last
    assert last["title"] == "March 2024"
    assert len(last["cells"]) == 42
    assert last["selection"] is None
    assert last["detail"].heading == MSG_NO_SELECTION
    assert last["detail"].events == []
    assert last["detail"].placeholder is None
    assert [c.cell.date_key for c in last["cells"] if c.cell.is_today] == ["2024-03-10"]
    assert not any(c.is_selected for c in last["cells"])


def test_start_loads_saved_events(view: FakeView, prompts: FakePrompts) -> None:
    """Test saved events are shown on the grid at startup."""
    storage = MemoryStorage({EVENTS_KEY: json.dumps({"2024-03-15": ["Dentist"]})})
    controller = CalendarController(
        EventStore(storage), view, prompts.alert, prompts.confirm, today=lambda: TODAY
    )
    controller.start()

    cell = next(c for c in view.last["cells"] if c.cell.date_key == "2024-03-15")
    assert cell.badge.texts == ["Dentist"]


def test_navigation(controller: CalendarController, view: FakeView) -> None:
    """Test moving between months."""
    controller.next_month()
    assert view.last["title"] == "April 2024"
    controller.previous_month()
    controller.previous_month()
    controller.previous_month()
    assert view.last["title"] == "January 2024"
    controller.previous_month()
    assert view.last["title"] == "December 2023"

    controller.go_to_today()
    assert view.last["title"] == "March 2024"


def test_select_current_month_cell(controller: CalendarController, view: FakeView) -> None:
    """Test clicking a day of the displayed month selects it."""
    selected = controller.select_cell(find_cell(view, "2024-03-15"))

    assert selected == datetime.date(2024, 3, 15)
    assert view.last["title"] == "March 2024"
    assert view.last["selection"] == datetime.date(2024, 3, 15)
    assert [c.cell.date_key for c in view.last["cells"] if c.is_selected] == ["2024-03-15"]

    detail = view.last["detail"]
    assert detail.heading == "Events for Friday, March 15, 2024"
    assert detail.date_key == "2024-03-15"
    assert detail.events == []
    assert detail.placeholder == MSG_NO_EVENTS


def test_select_previous_month_cell(controller: CalendarController, view: FakeView) -> None:
    """Test clicking a leading day goes back a month and selects it."""
    controller.select_cell(find_cell(view, "2024-02-25", current=False))

    assert view.last["title"] == "February 2024"
    assert view.last["selection"] == datetime.date(2024, 2, 25)
    assert [c.cell.date_key for c in view.last["cells"] if c.is_selected] == ["2024-02-25"]


def test_select_next_month_cell(controller: CalendarController, view: FakeView) -> None:
    """Test clicking a trailing day goes forward a month and selects it."""
    controller.select_cell(find_cell(view, "2024-04-06", current=False))

    assert view.last["title"] == "April 2024"
    assert view.last["selection"] == datetime.date(2024, 4, 6)


def test_select_next_month_cell_across_year(
    controller: CalendarController, view: FakeView
) -> None:
    """Test clicking a trailing January day in December."""
    controller.select_date(datetime.date(2024, 12, 24))
    controller.select_cell(find_cell(view, "2025-01-04", current=False))

    assert view.last["title"] == "January 2025"
    assert view.last["selection"] == datetime.date(2025, 1, 4)


def test_select_previous_month_cell_across_year(
    controller: CalendarController, view: FakeView
) -> None:
    """Test clicking a leading December day in January."""
    controller.select_date(datetime.date(2025, 1, 15))
    controller.select_cell(find_cell(view, "2024-12-29", current=False))

    assert view.last["title"] == "December 2024"
    assert view.last["selection"] == datetime.date(2024, 12, 29)
    assert [c.cell.date_key for c in view.last["cells"] if c.is_selected] == ["2024-12-29"]


def test_selection_not_marked_in_other_months(
    controller: CalendarController, view: FakeView
) -> None:
    """Test the selected day is only marked while its month is displayed."""
    controller.select_cell(find_cell(view, "2024-03-31"))
    controller.next_month()

    assert view.last["selection"] == datetime.date(2024, 3, 31)
    assert not any(c.is_selected for c in view.last["cells"])
    # The detail panel still follows the selection
    assert view.last["detail"].date_key == "2024-03-31"


def test_add_event_requires_selection(
    controller: CalendarController, view: FakeView, prompts: FakePrompts, storage: MemoryStorage
) -> None:
    """Test adding without a selected day alerts and changes nothing."""
    assert not controller.add_event("Dentist")
    assert prompts.alerts == [MSG_SELECT_DATE]
    assert storage.get_item(EVENTS_KEY) is None
    assert view.cleared == 0


@pytest.mark.parametrize("text", ["", "   ", "\t\n", None])
def test_add_event_requires_text(
    controller: CalendarController, view: FakeView, prompts: FakePrompts, text: str
) -> None:
    """Test adding a blank description alerts and changes nothing."""
    controller.select_date(datetime.date(2024, 3, 15))
    assert not controller.add_event(text)
    assert prompts.alerts == [MSG_ENTER_DESCRIPTION]
    assert controller.store.get_events("2024-03-15") == []


def test_add_and_delete_event(
    controller: CalendarController, view: FakeView, prompts: FakePrompts, storage: MemoryStorage
) -> None:
    """Test adding then deleting the only event of a day."""
    controller.select_cell(find_cell(view, "2024-03-15"))
    assert controller.add_event("  Dentist  ")

    assert stored_events(storage) == {"2024-03-15": ["Dentist"]}
    assert view.cleared == 1
    assert view.last["detail"].events == ["Dentist"]
    assert view.last["detail"].placeholder is None
    cell = next(c for c in view.last["cells"] if c.cell.date_key == "2024-03-15")
    assert cell.badge.texts == ["Dentist"]

    assert controller.delete_event("2024-03-15", 0)
    assert prompts.confirms == [MSG_CONFIRM_DELETE]
    assert stored_events(storage) == {}
    assert "2024-03-15" not in controller.store
    assert view.last["detail"].placeholder == MSG_NO_EVENTS
    assert prompts.alerts == []


def test_add_grows_list_by_one(
    controller: CalendarController, storage: MemoryStorage
) -> None:
    """Test each add appends exactly one event."""
    controller.select_date(datetime.date(2024, 3, 15))
    for i in range(6):
        controller.add_event(f"event {i}")
        assert len(controller.store.get_events("2024-03-15")) == i + 1
        assert len(stored_events(storage)["2024-03-15"]) == i + 1


def test_badges_for_many_events(controller: CalendarController, view: FakeView) -> None:
    """Test busy days render as dots, capped at five."""
    controller.select_date(datetime.date(2024, 3, 14))
    for text in ["a", "b", "c"]:
        controller.add_event(text)
    controller.select_date(datetime.date(2024, 3, 15))
    for text in ["a", "b", "c", "d", "e", "f"]:
        controller.add_event(text)

    badges = {c.cell.date_key: c.badge for c in view.last["cells"]}
    assert badges["2024-03-14"].dots == 3
    assert badges["2024-03-15"].dots == 5
    assert badges["2024-03-15"].texts == []


def test_delete_declined(
    controller: CalendarController, prompts: FakePrompts, storage: MemoryStorage
) -> None:
    """Test nothing is deleted when the user says no."""
    controller.select_date(datetime.date(2024, 3, 15))
    controller.add_event("Dentist")
    prompts.answer = False

    assert not controller.delete_event("2024-03-15", 0)
    assert stored_events(storage) == {"2024-03-15": ["Dentist"]}


def test_delete_keeps_order(controller: CalendarController, view: FakeView) -> None:
    """Test deleting from the middle keeps the other events in order."""
    controller.select_date(datetime.date(2024, 3, 15))
    for text in ["first", "second", "third"]:
        controller.add_event(text)

    assert controller.delete_event("2024-03-15", 1)
    assert view.last["detail"].events == ["first", "third"]


def test_delete_missing_event(controller: CalendarController, view: FakeView) -> None:
    """Test deleting an event that is gone does nothing."""
    renders = len(view.renders)
    assert not controller.delete_event("2024-03-15", 0)
    assert len(view.renders) == renders


def test_save_failure_keeps_event(view: FakeView, prompts: FakePrompts) -> None:
    """Test a failed save alerts but keeps the event in memory."""
    controller = CalendarController(
        EventStore(FailingStorage()), view, prompts.alert, prompts.confirm, today=lambda: TODAY
    )
    controller.start()
    controller.select_date(datetime.date(2024, 3, 15))

    assert controller.add_event("Dentist")
    assert prompts.alerts == [MSG_SAVE_FAILED]
    assert view.last["detail"].events == ["Dentist"]

    assert controller.delete_event("2024-03-15", 0)
    assert prompts.alerts == [MSG_SAVE_FAILED, MSG_SAVE_FAILED]
    assert "2024-03-15" not in controller.store
