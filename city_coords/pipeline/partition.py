"""Group states by country and write one JSON artifact per country."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Mapping

from city_coords.common.constants import FALLBACK_COUNTRY_CODE, OUTPUT_EXTENSION
from city_coords.common.errors import IoFailure
from city_coords.common.fs import write_json
from city_coords.common.logging import log_event
from city_coords.common.models import State, WrittenFile


def group_states_by_country(states: Iterable[State]) -> dict[int, list[State]]:
    """Bucket states by ``country_id`` in one pass.

    States keep their source order inside each bucket. Buckets enumerate in
    the order their country id was first seen.
    """
    by_country: dict[int, list[State]] = {}
    for state in states:
        by_country.setdefault(state.country_id, []).append(state)
    return by_country


def resolve_country_code(
    country_id: int,
    country_index: Mapping[int, str],
    fallback_code: str = FALLBACK_COUNTRY_CODE,
) -> str:
    return country_index.get(country_id, fallback_code)


def format_filename(country_id: int, code: str) -> str:
    return f"{country_id}_{code}{OUTPUT_EXTENSION}"


def progress_percent(written: int, total: int) -> int:
    return written * 100 // total


def write_country_files(
    by_country: Mapping[int, list[State]],
    country_index: Mapping[int, str],
    out_dir: Path,
    *,
    fallback_code: str = FALLBACK_COUNTRY_CODE,
    sort_groups: bool = False,
    logger: logging.Logger | None = None,
    run_id: str | None = None,
) -> list[WrittenFile]:
    total = len(by_country)
    country_ids = sorted(by_country) if sort_groups else list(by_country)
    if logger is not None:
        log_event(
            logger,
            f"Writing {total} country files...",
            run_id=run_id,
            stage="partition",
            event="WRITE_START",
            status="ok",
            rows_in=total,
        )

    written: list[WrittenFile] = []
    for position, country_id in enumerate(country_ids, start=1):
        states = by_country[country_id]
        code = resolve_country_code(country_id, country_index, fallback_code)
        filename = format_filename(country_id, code)
        out_path = out_dir / filename

        try:
            write_json(out_path, [state.to_dict() for state in states], sort_keys=False)
        except OSError as exc:
            raise IoFailure(out_path, "write", exc) from exc

        entry = WrittenFile(
            country_id=country_id,
            code=code,
            filename=filename,
            path=out_path,
            state_count=len(states),
            city_count=sum(len(state.cities) for state in states),
            progress=progress_percent(position, total),
        )
        written.append(entry)
        if logger is not None:
            log_event(
                logger,
                f"Wrote {filename} with {entry.state_count} states",
                run_id=run_id,
                stage="partition",
                event="FILE_WRITTEN",
                status="ok",
                path=str(out_path),
                country_id=country_id,
                progress=entry.progress,
                rows_out=entry.state_count,
            )
    return written
