"""Test fixtures for the calendar."""
from __future__ import annotations

import datetime
from typing import Any

import pytest

from controller import CalendarController, CalendarView
from storage import EventStore, MemoryStorage

TODAY = datetime.date(2024, 3, 10)


class FakeView(CalendarView):
    """Records what the controller renders."""

    def __init__(self) -> None:
        self.renders: list[dict[str, Any]] = []
        self.cleared = 0

    def render(self, title, cells, selection, detail) -> None:
        self.renders.append(
            {"title": title, "cells": cells, "selection": selection, "detail": detail}
        )

    def clear_input(self) -> None:
        self.cleared += 1

    @property
    def last(self) -> dict[str, Any]:
        return self.renders[-1]


class FakePrompts:
    """Stands in for the blocking alert and confirm dialogs."""

    def __init__(self) -> None:
        self.alerts: list[str] = []
        self.confirms: list[str] = []
        self.answer = True

    def alert(self, message: str) -> None:
        self.alerts.append(message)

    def confirm(self, message: str) -> bool:
        self.confirms.append(message)
        return self.answer


@pytest.fixture(name="storage")
def fake_storage() -> MemoryStorage:
    """Fixture for an empty key/value storage."""
    return MemoryStorage()


@pytest.fixture(name="store")
def fake_store(storage: MemoryStorage) -> EventStore:
    """Fixture for an event store on the in memory storage."""
    return EventStore(storage)


@pytest.fixture(name="view")
def fake_view() -> FakeView:
    return FakeView()


@pytest.fixture(name="prompts")
def fake_prompts() -> FakePrompts:
    return FakePrompts()


@pytest.fixture(name="controller")
def fake_controller(
    store: EventStore, view: FakeView, prompts: FakePrompts
) -> CalendarController:
    """Fixture for a started controller with today fixed to 2024-03-10."""
    controller = CalendarController(
        store=store,
        view=view,
        alert=prompts.alert,
        confirm=prompts.confirm,
        today=lambda: TODAY,
    )
    controller.start()
    return controller
