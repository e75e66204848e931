"""State models owned by the weather store, plus the tagged fetch outcome."""

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, StringConstraints, model_validator
from typing import Annotated, Literal, Optional, Tuple, Union
from weathercard.models.weather import WeatherSnapshot

City = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


def clean_city(name: Optional[str]) -> Optional[str]:
    """Returns the trimmed city name, or None when nothing is left."""
    if name is None:
        return None
    name = name.strip()
    return name or None


class FetchStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILED = "failed"


class AppState(BaseModel):
    """Everything the UI renders. Each store mutation produces a new instance."""

    model_config = ConfigDict(frozen=True)

    current_city: City
    snapshot: Optional[WeatherSnapshot] = None
    status: FetchStatus = FetchStatus.IDLE
    error_message: Optional[str] = None
    favorite_cities: Tuple[str, ...] = ()

    @model_validator(mode="after")
    def check_error_matches_status(self) -> "AppState":
        failed = self.status == FetchStatus.FAILED
        if failed != (self.error_message is not None):
            raise ValueError("error_message must be set exactly when status is FAILED")
        return self

    def evolve(self, **changes) -> "AppState":
        """Returns a validated copy with `changes` applied."""
        return AppState(**{**dict(self), **changes})


# --- Tagged fetch outcome ---


class FetchSuccess(BaseModel):
    kind: Literal["success"] = "success"
    snapshot: WeatherSnapshot


class ApplicationError(BaseModel):
    """The API answered with a non-zero error code."""

    kind: Literal["application_error"] = "application_error"
    reason: str


class TransportError(BaseModel):
    """The request itself failed: network, HTTP status or unreadable body."""

    kind: Literal["transport_error"] = "transport_error"
    detail: str


class ClientError(BaseModel):
    """The client could not issue the request at all, e.g. no API key."""

    kind: Literal["client_error"] = "client_error"
    detail: str


FetchResult = Annotated[
    Union[FetchSuccess, ApplicationError, TransportError, ClientError],
    Field(discriminator="kind"),
]
