"""Source adapters: one per external data source."""

from kiawah_concierge.adapters.sources.base import SourceAdapter
from kiawah_concierge.adapters.sources.open_meteo import OpenMeteoWeatherAdapter
from kiawah_concierge.adapters.sources.openweathermap import OpenWeatherMapAdapter
from kiawah_concierge.adapters.sources.property import PropertyAdapter
from kiawah_concierge.adapters.sources.sun_times import SunTimesAdapter
from kiawah_concierge.adapters.sources.tides import TideAdapter

__all__ = [
    "SourceAdapter",
    "PropertyAdapter",
    "OpenMeteoWeatherAdapter",
    "OpenWeatherMapAdapter",
    "SunTimesAdapter",
    "TideAdapter",
]
