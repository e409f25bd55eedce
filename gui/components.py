"""
Reusable GUI Components
"""
import customtkinter as ctk
from typing import Callable, Optional

from calendar_grid import CalendarCell, EventBadge


class DayCell(ctk.CTkFrame):
    """One day of the month grid, redrawn in place on every render"""

    DOT = "●"

    def __init__(
        self,
        parent,
        theme: dict,
        on_click: Callable[[CalendarCell], None],
        on_double_click: Callable[[CalendarCell], None],
        **kwargs
    ):
        super().__init__(parent, **kwargs)

        self.theme = theme
        self.on_click = on_click
        self.on_double_click = on_double_click
        self.cell: Optional[CalendarCell] = None

        self.configure(corner_radius=6, border_width=0, cursor="hand2")
        self._create_widgets()

    def _create_widgets(self):
        self.day_label = ctk.CTkLabel(self, text="", anchor="nw",
                                      font=ctk.CTkFont(size=13, weight="bold"))
        self.day_label.pack(fill="x", padx=6, pady=(4, 0))

        self.badge_label = ctk.CTkLabel(self, text="", anchor="nw", justify="left",
                                        font=ctk.CTkFont(size=10))
        self.badge_label.pack(fill="both", expand=True, padx=6, pady=(0, 4))

        for widget in (self, self.day_label, self.badge_label):
            widget.bind("<Button-1>", self._on_click)
            widget.bind("<Double-Button-1>", self._on_double_click)

    def _on_click(self, event=None):
        if self.cell is not None:
            self.on_click(self.cell)

    def _on_double_click(self, event=None):
        if self.cell is not None:
            self.on_double_click(self.cell)

    def update_cell(self, cell: CalendarCell, badge: EventBadge, is_selected: bool):
        self.cell = cell
        theme = self.theme

        if cell.is_today:
            fg = theme["today_color"]
        elif cell.is_current_month:
            fg = theme["cell_color"]
        else:
            fg = theme["other_month_color"]

        self.configure(
            fg_color=fg,
            border_width=3 if is_selected else 0,
            border_color=theme["selected_color"],
        )

        text_color = theme["text_color"] if cell.is_current_month else theme["text_secondary"]
        self.day_label.configure(text=str(cell.day), text_color=text_color)

        if badge.dots:
            self.badge_label.configure(text=self.DOT * badge.dots, text_color=theme["dot_color"])
        else:
            self.badge_label.configure(text="\n".join(badge.texts), text_color=theme["badge_color"])

    def set_theme(self, theme: dict):
        self.theme = theme


class EventRow(ctk.CTkFrame):
    """Single event in the detail panel with its delete button"""

    def __init__(
        self,
        parent,
        text: str,
        on_delete: Callable[[], None],
        **kwargs
    ):
        super().__init__(parent, **kwargs)

        self.configure(fg_color=("gray90", "gray20"), corner_radius=8)

        ctk.CTkLabel(self, text=text, anchor="w", justify="left", wraplength=220,
                     font=ctk.CTkFont(size=13)).pack(side="left", fill="x", expand=True,
                                                      padx=10, pady=8)

        ctk.CTkButton(
            self,
            text="Delete",
            width=60,
            height=28,
            fg_color="transparent",
            border_width=1,
            hover_color=("#FFEBEE", "#3D1F1F"),
            text_color=("#E74C3C", "#E74C3C"),
            command=on_delete
        ).pack(side="right", padx=10, pady=8)
