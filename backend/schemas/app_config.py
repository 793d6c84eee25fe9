from pydantic import BaseModel, Field
from typing import Optional

class ClientConfig(BaseModel):
    """Settings the browser needs before it can talk to Google and the API."""
    google_api_key: Optional[str] = Field(None, serialization_alias="googleApiKey")
    google_client_id: Optional[str] = Field(None, serialization_alias="googleClientId")
    api_url: str = Field("", serialization_alias="apiUrl")
