"""Alert preference commands."""

from .update_alert_preferences import (
    UpdateAlertPreferencesCommand,
    UpdateAlertPreferencesHandler,
)

__all__ = [
    "UpdateAlertPreferencesCommand",
    "UpdateAlertPreferencesHandler",
]
