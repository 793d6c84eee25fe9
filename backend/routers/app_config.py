from fastapi import APIRouter, Depends

from config import Settings, get_settings
from schemas.app_config import ClientConfig

router = APIRouter(prefix="/api", tags=["Config"])


@router.get("/config", response_model=ClientConfig)
def get_client_config(settings: Settings = Depends(get_settings)):
    """Configuration the frontend loads once on start-up."""
    return ClientConfig(
        google_api_key=settings.google_api_key,
        google_client_id=settings.google_client_id,
        api_url=settings.api_url,
    )
