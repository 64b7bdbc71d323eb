"""
Shared API state - settings.
Initialized by main.py after creating the app.
"""

from typing import Optional

from shared.settings import Settings

# Set by main.py
settings: Optional[Settings] = None


def init_api_state(settings_instance: Settings):
    global settings
    settings = settings_instance


def get_settings() -> Settings:
    return settings if settings is not None else Settings()
