"""
Calendar controller - view state, day selection and event editing

The controller owns the event store and the view state. It never touches
widgets directly: it hands grid cells and the detail panel to a view object
and asks the user through injected alert/confirm callables.
"""
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, List, Optional

from calendar_grid import (
    CalendarCell, EventBadge, build_month_grid, date_key, format_long_date,
    month_title, shift_month, summarize_events
)
from storage import EventStore, StorageError

_LOGGER = logging.getLogger(__name__)

MSG_SELECT_DATE = "Please select a date first"
MSG_ENTER_DESCRIPTION = "Please enter an event description"
MSG_CONFIRM_DELETE = "Are you sure you want to delete this event?"
MSG_SAVE_FAILED = "Error saving events. Your events may not be preserved."
MSG_NO_SELECTION = "Select a date to view events"
MSG_NO_EVENTS = "No events for this day"


@dataclass
class ViewState:
    """Displayed month and selected day, never persisted"""
    year: int
    month_index: int
    selected: Optional[date] = None

    @classmethod
    def for_today(cls, today: Optional[date] = None) -> "ViewState":
        today = today or date.today()
        return cls(year=today.year, month_index=today.month - 1)

    def shift(self, delta: int) -> None:
        self.year, self.month_index = shift_month(self.year, self.month_index, delta)


@dataclass(frozen=True)
class GridCell:
    """A grid cell with what the view needs to draw it"""
    cell: CalendarCell
    badge: EventBadge
    is_selected: bool = False


@dataclass(frozen=True)
class DetailPanel:
    """Contents of the side panel for the selected day"""
    heading: str
    date_key: Optional[str] = None
    events: List[str] = field(default_factory=list)
    placeholder: Optional[str] = None


class CalendarView:
    """Interface the controller renders into"""

    def render(self, title: str, cells: List[GridCell], selection: Optional[date],
               detail: DetailPanel) -> None:
        raise NotImplementedError

    def clear_input(self) -> None:
        raise NotImplementedError


class CalendarController:
    """Single owner of the event store and the view state"""

    def __init__(
        self,
        store: EventStore,
        view: CalendarView,
        alert: Callable[[str], None],
        confirm: Callable[[str], bool],
        today: Callable[[], date] = date.today,
    ):
        self.store = store
        self.view = view
        self.alert = alert
        self.confirm = confirm
        self.today = today
        self.state = ViewState.for_today(today())

    def start(self) -> None:
        """Load events and draw the current month"""
        self.store.load()
        self.render()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def grid(self) -> List[GridCell]:
        selected = self.state.selected
        cells = []
        for cell in build_month_grid(self.state.year, self.state.month_index, self.today()):
            cells.append(GridCell(
                cell=cell,
                badge=summarize_events(self.store.get_events(cell.date_key)),
                is_selected=(cell.is_current_month and cell.date == selected),
            ))
        return cells

    def detail(self) -> DetailPanel:
        selected = self.state.selected
        if selected is None:
            return DetailPanel(heading=MSG_NO_SELECTION)

        key = date_key(selected)
        events = self.store.get_events(key)
        return DetailPanel(
            heading=f"Events for {format_long_date(selected)}",
            date_key=key,
            events=events,
            placeholder=None if events else MSG_NO_EVENTS,
        )

    def render(self) -> None:
        title = month_title(self.state.year, self.state.month_index)
        self.view.render(title, self.grid(), self.state.selected, self.detail())

    # ------------------------------------------------------------------
    # Navigation and selection
    # ------------------------------------------------------------------

    def previous_month(self) -> None:
        self.state.shift(-1)
        self.render()

    def next_month(self) -> None:
        self.state.shift(1)
        self.render()

    def go_to_today(self) -> None:
        today = self.today()
        self.state.year, self.state.month_index = today.year, today.month - 1
        self.render()

    def select_cell(self, cell: CalendarCell) -> date:
        """
        Select the clicked day

        Days of a neighbouring month act as navigation: a day above 15 is
        taken to belong to the previous month, anything else to the next.
        """
        if not cell.is_current_month:
            self.state.shift(-1 if cell.day > 15 else 1)
            self.state.selected = date(self.state.year, self.state.month_index + 1, cell.day)
        else:
            self.state.selected = cell.date

        self.render()
        return self.state.selected

    def select_date(self, day: date) -> None:
        """Select a day and show its month"""
        self.state.year, self.state.month_index = day.year, day.month - 1
        self.state.selected = day
        self.render()

    # ------------------------------------------------------------------
    # Event editing
    # ------------------------------------------------------------------

    def add_event(self, text: Optional[str]) -> bool:
        """Add an event to the selected day; alerts and returns False when invalid"""
        if self.state.selected is None:
            self.alert(MSG_SELECT_DATE)
            return False

        text = (text or "").strip()
        if not text:
            self.alert(MSG_ENTER_DESCRIPTION)
            return False

        key = date_key(self.state.selected)
        self.store.add_event(key, text)
        _LOGGER.info("Added event on %s", key)
        self._save()

        self.view.clear_input()
        self.render()
        return True

    def delete_event(self, key: str, index: int) -> bool:
        """Delete one event after the user confirms"""
        if not self.confirm(MSG_CONFIRM_DELETE):
            return False

        try:
            self.store.delete_event(key, index)
        except IndexError:
            _LOGGER.warning("No event %d on %s to delete", index, key)
            return False

        _LOGGER.info("Deleted event %d on %s", index, key)
        self._save()
        self.render()
        return True

    def _save(self) -> None:
        try:
            self.store.save()
        except StorageError as e:
            _LOGGER.error("Error saving events: %s", e)
            self.alert(MSG_SAVE_FAILED)
