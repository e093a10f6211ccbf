"""Alert preference queries."""

from .get_alert_preferences import GetAlertPreferencesQuery, GetAlertPreferencesHandler

__all__ = [
    "GetAlertPreferencesQuery",
    "GetAlertPreferencesHandler",
]
