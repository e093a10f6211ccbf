"""Get Alert Preferences Query - stored row, or the defaults when there is none."""

from dataclasses import dataclass

from productboards.application.common.interfaces import Query, QueryHandler
from productboards.domain.entities.alert_preferences import AlertPreferences
from productboards.domain.ports.repositories import AlertPreferencesRepository
from productboards.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class GetAlertPreferencesQuery(Query[AlertPreferences]):
    user_id: UserId


class GetAlertPreferencesHandler(QueryHandler[AlertPreferences]):
    def __init__(self, preferences_repository: AlertPreferencesRepository):
        self._preferences_repository = preferences_repository

    async def execute(self, query: GetAlertPreferencesQuery) -> AlertPreferences:
        stored = await self._preferences_repository.get_by_user(query.user_id)
        return stored or AlertPreferences.default(query.user_id)
