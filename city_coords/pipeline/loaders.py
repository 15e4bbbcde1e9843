"""Country catalog and state/city catalog loaders."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable

from city_coords.common.constants import COUNTRIES_FILENAME, MAX_FILE_SIZE, REGIONS_FILENAME
from city_coords.common.errors import IoFailure, Malformed
from city_coords.common.fs import read_text
from city_coords.common.models import City, Country, State
from city_coords.common.schema import optional_str, require_array, require_object, require_str, require_u32
from city_coords.pipeline.size_guard import validate_file_size


def _read_catalog(path: Path, max_size: int) -> Any:
    validate_file_size(path, max_size)
    try:
        text = read_text(path)
    except UnicodeDecodeError as exc:
        raise Malformed(path.name, f"invalid UTF-8: {exc}") from exc
    except OSError as exc:
        raise IoFailure(path, "read", exc) from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise Malformed(path.name, str(exc)) from exc


def parse_countries(payload: Any, source: str = COUNTRIES_FILENAME) -> list[Country]:
    countries: list[Country] = []
    for idx, raw in enumerate(require_array(payload, source, "$")):
        ctx = f"[{idx}]"
        record = require_object(raw, source, ctx)
        countries.append(
            Country(
                id=require_u32(record, "id", source, ctx),
                code=require_str(record, "iso2", source, ctx),
            )
        )
    return countries


def build_country_index(countries: Iterable[Country]) -> dict[int, str]:
    """Map country id to code; a repeated id keeps the last code seen."""
    index: dict[int, str] = {}
    for country in countries:
        index[country.id] = country.code
    return index


def _parse_city(raw: Any, source: str, ctx: str) -> City:
    record = require_object(raw, source, ctx)
    return City(
        id=require_u32(record, "id", source, ctx),
        name=require_str(record, "name", source, ctx),
        latitude=optional_str(record, "latitude", source, ctx),
        longitude=optional_str(record, "longitude", source, ctx),
    )


def _parse_state(raw: Any, source: str, ctx: str) -> State:
    record = require_object(raw, source, ctx)
    cities: tuple[City, ...] = ()
    if "cities" in record:
        raw_cities = require_array(record["cities"], source, f"{ctx}.cities")
        cities = tuple(
            _parse_city(raw_city, source, f"{ctx}.cities[{city_idx}]")
            for city_idx, raw_city in enumerate(raw_cities)
        )
    return State(
        id=require_u32(record, "id", source, ctx),
        country_id=require_u32(record, "country_id", source, ctx),
        name=require_str(record, "name", source, ctx),
        state_code=optional_str(record, "state_code", source, ctx),
        latitude=optional_str(record, "latitude", source, ctx),
        longitude=optional_str(record, "longitude", source, ctx),
        cities=cities,
    )


def parse_states(payload: Any, source: str = REGIONS_FILENAME) -> list[State]:
    return [_parse_state(raw, source, f"[{idx}]") for idx, raw in enumerate(require_array(payload, source, "$"))]


def load_country_index(
    raw_dir: Path,
    *,
    filename: str = COUNTRIES_FILENAME,
    max_size: int = MAX_FILE_SIZE,
) -> dict[int, str]:
    path = raw_dir / filename
    payload = _read_catalog(path, max_size)
    return build_country_index(parse_countries(payload, source=filename))


def load_states(
    raw_dir: Path,
    *,
    filename: str = REGIONS_FILENAME,
    max_size: int = MAX_FILE_SIZE,
) -> list[State]:
    path = raw_dir / filename
    payload = _read_catalog(path, max_size)
    return parse_states(payload, source=filename)
