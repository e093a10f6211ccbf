"""Update Alert Preferences Command - partial update, creating the row on first save."""

import logging
from dataclasses import dataclass, field
from typing import Any

from productboards.application.common.interfaces import Command, CommandHandler
from productboards.domain.entities.alert_preferences import AlertPreferences
from productboards.domain.ports.repositories import AlertPreferencesRepository
from productboards.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpdateAlertPreferencesCommand(Command[AlertPreferences]):
    user_id: UserId
    changes: dict[str, Any] = field(default_factory=dict)


class UpdateAlertPreferencesHandler(CommandHandler[AlertPreferences]):
    def __init__(self, preferences_repository: AlertPreferencesRepository):
        self._preferences_repository = preferences_repository

    async def execute(self, command: UpdateAlertPreferencesCommand) -> AlertPreferences:
        preferences = await self._preferences_repository.get_by_user(command.user_id)
        created = preferences is None
        preferences = preferences or AlertPreferences.default(command.user_id)

        preferences.apply_changes(command.changes)
        await self._preferences_repository.save(preferences)
        if created:
            logger.info(f"Alert preferences created for user {command.user_id.value}")
        return preferences
