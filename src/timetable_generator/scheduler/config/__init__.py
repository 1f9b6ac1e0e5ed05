"""Configuration loaders for the timetable generator."""

from .loader import ConfigLoader
from .settings import GeneratorSettings

__all__ = [
    "ConfigLoader",
    "GeneratorSettings",
]
