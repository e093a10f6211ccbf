"""
Alert Preferences Repository Port - one row per user.
Implementation: productboards/infrastructure/persistence/prisma_alert_preferences_repository.py
"""

from abc import ABC, abstractmethod
from typing import Optional

from productboards.domain.entities.alert_preferences import AlertPreferences
from productboards.domain.value_objects.user_id import UserId


class AlertPreferencesRepository(ABC):
    @abstractmethod
    async def get_by_user(self, user_id: UserId) -> Optional[AlertPreferences]: ...

    @abstractmethod
    async def save(self, preferences: AlertPreferences) -> None:
        """Insert or update the user's row."""
        ...
