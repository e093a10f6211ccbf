"""
Alert Preferences API Router - the caller's price alert settings.

- GET /alert-preferences   stored settings, or the defaults
- PUT /alert-preferences   change email alerts and/or the drop threshold
"""

from typing import Optional

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from productboards.application.commands.alerts import (
    UpdateAlertPreferencesCommand,
    UpdateAlertPreferencesHandler,
)
from productboards.application.dto import AlertPreferencesDTO
from productboards.application.queries.alerts import (
    GetAlertPreferencesHandler,
    GetAlertPreferencesQuery,
)
from productboards.presentation.dependencies.auth import AuthUser, get_current_user


class UpdateAlertPreferencesRequest(BaseModel):
    """Only the fields present in the body are changed."""

    email_enabled: Optional[bool] = None
    price_drop_threshold: Optional[int] = None


router = APIRouter(prefix="/alert-preferences", tags=["alerts"])


@router.get("", response_model=AlertPreferencesDTO)
@inject
async def get_alert_preferences(
    handler: FromDishka[GetAlertPreferencesHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    preferences = await handler.execute(GetAlertPreferencesQuery(user_id=current_user.id))
    return AlertPreferencesDTO.from_entity(preferences)


@router.put("", response_model=AlertPreferencesDTO)
@inject
async def update_alert_preferences(
    request: UpdateAlertPreferencesRequest,
    handler: FromDishka[UpdateAlertPreferencesHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    preferences = await handler.execute(
        UpdateAlertPreferencesCommand(
            user_id=current_user.id,
            changes=request.model_dump(exclude_unset=True),
        )
    )
    return AlertPreferencesDTO.from_entity(preferences)
