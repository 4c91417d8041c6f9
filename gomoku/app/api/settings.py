from fastapi import APIRouter

from gomoku.app.api.errors import to_http_error
from gomoku.app.core.settings import settings_store
from gomoku.app.engine.exceptions import ConfigurationError
from gomoku.app.schemas.game_schema import SettingsResponse, SettingsUpdate

router = APIRouter()

@router.get("", response_model=SettingsResponse)
async def get_settings():
    return settings_store.get()

@router.patch("", response_model=SettingsResponse)
async def update_settings(changes: SettingsUpdate):
    """Only the fields present in the body are changed."""
    try:
        return settings_store.update(**changes.model_dump(exclude_none=True))
    except ConfigurationError as e:
        raise to_http_error(e)
