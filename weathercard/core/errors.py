"""Exceptions raised by the weather API client."""


class WeatherClientError(Exception):
    """Base error for anything that stops a weather request from completing."""


class WeatherTransportError(WeatherClientError):
    """The request failed on the wire or the response could not be read."""
