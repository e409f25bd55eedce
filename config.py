"""
Configuration settings for Desk Calendar
"""
import json
import logging
import os
from pathlib import Path

_LOGGER = logging.getLogger(__name__)

# Base paths
APP_DIR = Path(__file__).parent.absolute()


def default_data_dir(app_dir: Path = APP_DIR) -> Path:
    """Where events and settings are kept"""
    # A source checkout keeps its data next to the code
    if (app_dir / "pyproject.toml").exists():
        return app_dir / "data"
    if os.name == "nt":
        appdata = os.environ.get("APPDATA")
        return (Path(appdata) if appdata else Path.home()) / "DeskCalendar"
    return Path.home() / ".desk-calendar"


DATA_DIR = default_data_dir()

# Data files
STORAGE_FILE = DATA_DIR / "local_storage.json"
SETTINGS_FILE = DATA_DIR / "settings.json"
ICON_FILE = APP_DIR / "ycalendar.png"

# Key the whole event store is saved under
EVENTS_KEY = "calendarEvents"

WINDOW_CONFIG = {
    "title": "Calendar",
    "width": 1000,
    "height": 700,
    "min_width": 500,
    "min_height": 400,
}

# Default user settings
DEFAULT_SETTINGS = {
    "appearance_mode": "dark",  # dark, light, system
    "color_theme": "blue",
    "log_level": "INFO",
}

APPEARANCE_MODES = ("dark", "light", "system")


# Cell palettes, as (light, dark) pairs where customtkinter accepts them
THEMES = {
    "dark": {
        "name": "Dark",
        "cell_color": "#2B2B3A",
        "other_month_color": "#1F1F29",
        "hover_color": "#34344A",
        "text_color": "#FFFFFF",
        "text_secondary": "#7A7A8C",
        "today_color": "#6495ED",
        "selected_color": "#27AE60",
        "badge_color": "#B4B4BE",
        "dot_color": "#F1C40F",
    },
    "light": {
        "name": "Light",
        "cell_color": "#FCFAF8",
        "other_month_color": "#EAE7E3",
        "hover_color": "#F0EEEB",
        "text_color": "#32302D",
        "text_secondary": "#A09A94",
        "today_color": "#B48264",
        "selected_color": "#2ECC71",
        "badge_color": "#78736E",
        "dot_color": "#E74C3C",
    },
}


def load_settings():
    """Load user settings from file"""
    if not SETTINGS_FILE.exists():
        return DEFAULT_SETTINGS.copy()

    try:
        with open(SETTINGS_FILE, 'r', encoding='utf-8') as f:
            saved = json.load(f)
    except (ValueError, OSError) as e:
        _LOGGER.warning("Could not read settings from %s: %s", SETTINGS_FILE, e)
        return DEFAULT_SETTINGS.copy()

    settings = DEFAULT_SETTINGS.copy()
    if isinstance(saved, dict):
        settings.update(saved)
    return settings


def save_settings(settings):
    """Save user settings to file"""
    try:
        SETTINGS_FILE.parent.mkdir(parents=True, exist_ok=True)
        with open(SETTINGS_FILE, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2)
        return True
    except OSError as e:
        _LOGGER.error("Could not save settings to %s: %s", SETTINGS_FILE, e)
        return False


def get_theme(theme_name):
    """Get theme colors by name"""
    return THEMES.get(theme_name, THEMES["dark"])
