"""Repositories implementation package."""

from .telemetry_repository import TelemetryRepository

__all__ = ["TelemetryRepository"]
