"""
Main Application GUI - Month Grid with Event Panel
"""
import customtkinter as ctk
from datetime import date
from pathlib import Path
from tkinter import TclError, messagebox
from typing import List, Optional
import logging
import sys

from PIL import ImageTk

sys.path.insert(0, str(Path(__file__).parent.parent))

from config import (
    APPEARANCE_MODES, ICON_FILE, WINDOW_CONFIG,
    get_theme, load_settings, save_settings
)
from calendar_grid import WEEKDAY_HEADERS, CalendarCell, format_long_date
from controller import CalendarController, CalendarView, DetailPanel, GridCell
from storage import EventStore, LocalStorage
from gui.components import DayCell, EventRow
from gui.icon import load_app_icon

_LOGGER = logging.getLogger(__name__)


class CalendarApp(ctk.CTk, CalendarView):
    """Main Application Window"""

    def __init__(self, store: Optional[EventStore] = None, settings: Optional[dict] = None):
        super().__init__()

        self.settings = settings if settings is not None else load_settings()
        ctk.set_appearance_mode(self.settings.get("appearance_mode", "dark"))
        ctk.set_default_color_theme(self.settings.get("color_theme", "blue"))
        self.theme = get_theme(self._theme_name())

        self.title(WINDOW_CONFIG["title"])
        self.geometry(f"{WINDOW_CONFIG['width']}x{WINDOW_CONFIG['height']}")
        self.minsize(WINDOW_CONFIG["min_width"], WINDOW_CONFIG["min_height"])
        self._set_icon()

        self.day_cells: List[DayCell] = []

        self._create_layout()
        self._create_calendar()
        self._create_event_panel()

        self.controller = CalendarController(
            store=store or EventStore(LocalStorage()),
            view=self,
            alert=self._alert,
            confirm=self._confirm,
        )
        self.controller.start()

    def _theme_name(self):
        mode = self.settings.get("appearance_mode", "dark")
        if mode == "system":
            return ctk.get_appearance_mode().lower()
        return mode

    def _set_icon(self):
        try:
            self._icon_image = ImageTk.PhotoImage(load_app_icon(ICON_FILE))
            self.iconphoto(True, self._icon_image)
        except TclError as e:
            _LOGGER.warning("Could not set window icon: %s", e)

    def _create_layout(self):
        self.grid_columnconfigure(0, weight=3)
        self.grid_columnconfigure(1, weight=1, minsize=280)
        self.grid_rowconfigure(0, weight=1)

    def _create_calendar(self):
        main = ctk.CTkFrame(self, corner_radius=0, fg_color="transparent")
        main.grid(row=0, column=0, sticky="nswe", padx=15, pady=15)
        main.grid_columnconfigure(0, weight=1)
        main.grid_rowconfigure(2, weight=1)

        # Header
        header = ctk.CTkFrame(main, fg_color="transparent")
        header.grid(row=0, column=0, sticky="we", pady=(0, 10))

        ctk.CTkButton(header, text="‹", width=36, height=32,
                      command=lambda: self.controller.previous_month()).pack(side="left")

        self.month_label = ctk.CTkLabel(header, text="", width=200,
                                        font=ctk.CTkFont(size=20, weight="bold"))
        self.month_label.pack(side="left", padx=10)

        ctk.CTkButton(header, text="›", width=36, height=32,
                      command=lambda: self.controller.next_month()).pack(side="left")

        ctk.CTkButton(header, text="Today", width=70, height=32, fg_color="transparent",
                      border_width=1, command=lambda: self.controller.go_to_today()).pack(side="left", padx=10)

        self.appearance_var = ctk.StringVar(value=self.settings.get("appearance_mode", "dark"))
        ctk.CTkSegmentedButton(header, values=list(APPEARANCE_MODES), variable=self.appearance_var,
                               command=self._on_appearance_change).pack(side="right")

        # Weekday headers
        weekdays = ctk.CTkFrame(main, fg_color="transparent")
        weekdays.grid(row=1, column=0, sticky="we")
        for i, name in enumerate(WEEKDAY_HEADERS):
            weekdays.grid_columnconfigure(i, weight=1, uniform="day")
            ctk.CTkLabel(weekdays, text=name, font=ctk.CTkFont(size=12, weight="bold"),
                         text_color=("gray40", "gray60")).grid(row=0, column=i, sticky="we")

        # 6 x 7 grid
        grid = ctk.CTkFrame(main, fg_color="transparent")
        grid.grid(row=2, column=0, sticky="nswe", pady=(5, 0))
        for col in range(7):
            grid.grid_columnconfigure(col, weight=1, uniform="day")
        for row in range(6):
            grid.grid_rowconfigure(row, weight=1, uniform="week")

        for i in range(42):
            cell = DayCell(grid, theme=self.theme,
                           on_click=self._on_cell_click,
                           on_double_click=self._on_cell_double_click)
            cell.grid(row=i // 7, column=i % 7, sticky="nswe", padx=2, pady=2)
            self.day_cells.append(cell)

    def _create_event_panel(self):
        panel = ctk.CTkFrame(self, corner_radius=0)
        panel.grid(row=0, column=1, sticky="nswe")
        panel.grid_columnconfigure(0, weight=1)
        panel.grid_rowconfigure(3, weight=1)

        self.detail_heading = ctk.CTkLabel(panel, text="", wraplength=250, justify="left",
                                           font=ctk.CTkFont(size=15, weight="bold"))
        self.detail_heading.grid(row=0, column=0, sticky="w", padx=15, pady=(20, 10))

        self.event_entry = ctk.CTkEntry(panel, placeholder_text="New event...", height=32)
        self.event_entry.grid(row=1, column=0, sticky="we", padx=15, pady=3)
        self.event_entry.bind("<Return>", lambda event: self._add_event())

        ctk.CTkButton(panel, text="Add Event", height=32,
                      command=self._add_event).grid(row=2, column=0, sticky="we", padx=15, pady=(3, 10))

        self.events_scroll = ctk.CTkScrollableFrame(panel, fg_color="transparent")
        self.events_scroll.grid(row=3, column=0, sticky="nswe", padx=5, pady=(0, 10))
        self.events_scroll.grid_columnconfigure(0, weight=1)

    # ------------------------------------------------------------------
    # CalendarView
    # ------------------------------------------------------------------

    def render(self, title: str, cells: List[GridCell], selection: Optional[date],
               detail: DetailPanel) -> None:
        self.month_label.configure(text=title)

        for widget, grid_cell in zip(self.day_cells, cells):
            widget.update_cell(grid_cell.cell, grid_cell.badge, grid_cell.is_selected)

        self._render_detail(detail)

    def clear_input(self) -> None:
        self.event_entry.delete(0, "end")

    def _render_detail(self, detail: DetailPanel):
        self.detail_heading.configure(text=detail.heading)

        for widget in self.events_scroll.winfo_children():
            widget.destroy()

        if detail.placeholder:
            ctk.CTkLabel(self.events_scroll, text=detail.placeholder, font=ctk.CTkFont(size=13),
                         text_color=("gray50", "gray60")).pack(pady=20)
            return

        for index, text in enumerate(detail.events):
            row = EventRow(self.events_scroll, text=text,
                           on_delete=lambda k=detail.date_key, i=index: self.controller.delete_event(k, i))
            row.pack(fill="x", pady=4)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def _on_cell_click(self, cell: CalendarCell):
        self.controller.select_cell(cell)

    def _on_cell_double_click(self, cell: CalendarCell):
        # the first click of the pair already selected the day
        selected = self.controller.state.selected
        if not cell.is_current_month or selected != cell.date:
            return

        dialog = ctk.CTkInputDialog(text=f"Add event for {format_long_date(selected)}",
                                    title="Add Event")
        text = dialog.get_input()
        if text is not None:
            self.controller.add_event(text)

    def _add_event(self):
        self.controller.add_event(self.event_entry.get())

    def _on_appearance_change(self, mode):
        self.settings["appearance_mode"] = mode
        save_settings(self.settings)
        ctk.set_appearance_mode(mode)

        self.theme = get_theme(self._theme_name())
        for cell in self.day_cells:
            cell.set_theme(self.theme)
        self.controller.render()

    def _alert(self, message: str) -> None:
        messagebox.showwarning(WINDOW_CONFIG["title"], message, parent=self)

    def _confirm(self, message: str) -> bool:
        return messagebox.askyesno(WINDOW_CONFIG["title"], message, parent=self)


def run_app():
    app = CalendarApp()
    app.mainloop()


if __name__ == "__main__":
    run_app()
