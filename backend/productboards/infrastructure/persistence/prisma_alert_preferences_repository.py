"""Prisma Alert Preferences Repository Implementation."""

from typing import Optional

from prisma import Prisma
from prisma.models import AlertPreferences as PrismaAlertPreferences

from productboards.domain.entities.alert_preferences import AlertPreferences
from productboards.domain.ports.repositories import AlertPreferencesRepository
from productboards.domain.value_objects.user_id import UserId
from productboards.infrastructure.persistence.errors import store_errors


class PrismaAlertPreferencesRepository(AlertPreferencesRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _to_entity(self, record: PrismaAlertPreferences) -> AlertPreferences:
        return AlertPreferences(
            user_id=UserId(record.user_id),
            email_enabled=record.email_enabled,
            price_drop_threshold=record.price_drop_threshold,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    async def get_by_user(self, user_id: UserId) -> Optional[AlertPreferences]:
        with store_errors("get alert preferences"):
            record = await self._prisma.alertpreferences.find_unique(
                where={"user_id": user_id.value}
            )
        return self._to_entity(record) if record else None

    async def save(self, preferences: AlertPreferences) -> None:
        fields = {
            "email_enabled": preferences.email_enabled,
            "price_drop_threshold": preferences.price_drop_threshold,
            "updated_at": preferences.updated_at,
        }
        with store_errors("save alert preferences"):
            await self._prisma.alertpreferences.upsert(
                where={"user_id": preferences.user_id.value},
                data={
                    "create": {
                        "user_id": preferences.user_id.value,
                        "created_at": preferences.created_at,
                        **fields,
                    },
                    "update": fields,
                },
            )
