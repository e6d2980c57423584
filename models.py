import datetime
from enum import Enum
from typing import List, Optional

import dateutil.parser
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_BASE_URL = "https://api.openshock.app/"
LIBRARY_NAME = "openshock-client"

MIN_DURATION_MS = 300
MAX_DURATION_MS = 65535


def parse_created_on(value) -> Optional[datetime.datetime]:
    """Parse a createdOn timestamp, returning None if it isn't ISO-8601."""
    if not value:
        return None
    try:
        return dateutil.parser.isoparse(value)
    except (TypeError, ValueError):
        return None


class ClientConfig(BaseModel):
    """Client settings and the defaults applied to control commands."""

    model_config = ConfigDict(frozen=True)

    base_url: str = DEFAULT_BASE_URL
    user_agent: str = f"Mozilla/5.0 (Python {LIBRARY_NAME})"
    custom_name: Optional[str] = LIBRARY_NAME
    intensity: int = 1
    duration: int = Field(default=1000, ge=MIN_DURATION_MS, le=MAX_DURATION_MS)
    # Seconds; None leaves it to requests (no timeout)
    timeout: Optional[float] = None


class ControlType(str, Enum):
    SHOCK = "Shock"
    VIBRATE = "Vibrate"
    SOUND = "Sound"
    STOP = "Stop"


class Shocker(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    rf_id: Optional[str] = Field(default=None, alias="rfId")
    model: Optional[str] = None
    name: Optional[str] = None
    is_paused: bool = Field(default=False, alias="isPaused")
    created_on: Optional[str] = Field(default=None, alias="createdOn")

    @field_validator("rf_id", mode="before")
    @classmethod
    def rf_id_as_string(cls, v):
        """The API sends the RF id as a number; keep it as a string."""
        if v is None:
            return v
        return str(v)

    @property
    def created_on_datetime(self):
        return parse_created_on(self.created_on)


class ControlCommand(BaseModel):
    id: str
    type: ControlType
    intensity: int
    duration: int = Field(ge=MIN_DURATION_MS, le=MAX_DURATION_MS)
    exclusive: bool = True


class ControlRequest(BaseModel):
    shocks: List[ControlCommand]
    custom_name: Optional[str] = Field(default=None, alias="customName")

    model_config = ConfigDict(populate_by_name=True)

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


# Response envelopes, one per endpoint

class HubData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(min_length=1)
    name: Optional[str] = None
    created_on: Optional[str] = Field(default=None, alias="createdOn")


class VersionData(BaseModel):
    version: str = Field(min_length=1)


class VersionResponse(BaseModel):
    data: VersionData


class HubListResponse(BaseModel):
    data: List[HubData]


class HubResponse(BaseModel):
    data: HubData


class HubShockers(BaseModel):
    shockers: List[Shocker]


class OwnedHubShockers(BaseModel):
    id: str
    # Left raw; only the matched hub's list is validated as HubShockers
    shockers: Optional[list] = None


class OwnedShockersResponse(BaseModel):
    data: List[OwnedHubShockers]


class ControlResponse(BaseModel):
    message: str = Field(min_length=1)
