"""Alert preference DTOs."""

from pydantic import BaseModel

from productboards.domain.entities.alert_preferences import AlertPreferences


class AlertPreferencesDTO(BaseModel):
    email_enabled: bool
    price_drop_threshold: int

    @classmethod
    def from_entity(cls, preferences: AlertPreferences) -> "AlertPreferencesDTO":
        return cls(
            email_enabled=preferences.email_enabled,
            price_drop_threshold=preferences.price_drop_threshold,
        )
