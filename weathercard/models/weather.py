"""Pydantic models for the weather API envelope and the snapshots built from it."""

from pydantic import BaseModel, ConfigDict, model_validator
from typing import Optional, Tuple


class RealtimeWeather(BaseModel):
    """Current conditions for the selected city."""

    model_config = ConfigDict(frozen=True)

    temperature: str
    humidity: str
    description: str
    wind_direction: str
    wind_power: str
    air_quality_index: str


class ForecastDay(BaseModel):
    """One day of the forecast strip."""

    model_config = ConfigDict(frozen=True)

    date: str
    temperature_range: str
    weather_description: str
    day_icon_id: str
    night_icon_id: str
    wind_direction: str


class WeatherSnapshot(BaseModel):
    """Weather for one city as of the last successful fetch."""

    model_config = ConfigDict(frozen=True)

    city: str
    realtime: RealtimeWeather
    forecast: Tuple[ForecastDay, ...] = ()


# --- Wire format of the simpleWeather/query endpoint ---


class WirePayload(BaseModel):
    """Base for raw API payloads; the API mixes numbers and strings freely."""

    model_config = ConfigDict(coerce_numbers_to_str=True)


class RealtimePayload(WirePayload):
    temperature: str
    humidity: str
    info: str
    wid: str = ""
    direct: str
    power: str
    aqi: str = ""


class IconIds(WirePayload):
    day: str
    night: str


class FuturePayload(WirePayload):
    date: str
    temperature: str
    weather: str
    wid: IconIds
    direct: str


class WeatherResult(WirePayload):
    """The `result` object of a successful response."""

    city: str
    realtime: RealtimePayload
    future: Tuple[FuturePayload, ...] = ()

    def to_snapshot(self) -> WeatherSnapshot:
        """Converts the raw payload to the snapshot the store keeps."""
        realtime = self.realtime
        return WeatherSnapshot(
            city=self.city,
            realtime=RealtimeWeather(
                temperature=realtime.temperature,
                humidity=realtime.humidity,
                description=realtime.info,
                wind_direction=realtime.direct,
                wind_power=realtime.power,
                air_quality_index=realtime.aqi,
            ),
            forecast=tuple(
                ForecastDay(
                    date=day.date,
                    temperature_range=day.temperature,
                    weather_description=day.weather,
                    day_icon_id=day.wid.day,
                    night_icon_id=day.wid.night,
                    wind_direction=day.direct,
                )
                for day in self.future
            ),
        )


class WeatherEnvelope(WirePayload):
    """Top-level response: `error_code` 0 means `result` carries the weather."""

    reason: str = ""
    result: Optional[WeatherResult] = None
    error_code: int

    @model_validator(mode="after")
    def check_result_present(self) -> "WeatherEnvelope":
        if self.error_code == 0 and self.result is None:
            raise ValueError("error_code is 0 but the response has no result")
        return self

    @property
    def ok(self) -> bool:
        return self.error_code == 0
