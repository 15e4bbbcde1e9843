"""Data models used across the pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class Country:
    id: int
    code: str


@dataclass(frozen=True)
class City:
    id: int
    name: str
    latitude: str | None = None
    longitude: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }


@dataclass(frozen=True)
class State:
    id: int
    country_id: int
    name: str
    state_code: str | None = None
    latitude: str | None = None
    longitude: str | None = None
    cities: tuple[City, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        # Key order is the on-disk field order; an empty city list is left out.
        out: dict[str, Any] = {
            "id": self.id,
            "country_id": self.country_id,
            "name": self.name,
            "state_code": self.state_code,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }
        if self.cities:
            out["cities"] = [city.to_dict() for city in self.cities]
        return out


@dataclass(frozen=True)
class WrittenFile:
    country_id: int
    code: str
    filename: str
    path: Path
    state_count: int
    city_count: int
    progress: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "country_id": self.country_id,
            "code": self.code,
            "filename": self.filename,
            "state_count": self.state_count,
            "city_count": self.city_count,
        }
