"""Run summary report."""

from __future__ import annotations

from pathlib import Path

from city_coords.common.errors import IoFailure
from city_coords.common.fs import write_json
from city_coords.common.logging import utc_timestamp_iso
from city_coords.common.models import WrittenFile


def write_run_summary(
    report_path: Path,
    *,
    run_id: str,
    countries_loaded: int,
    states_loaded: int,
    files: list[WrittenFile],
    fallback_country_ids: list[int],
) -> Path:
    payload = {
        "run_id": run_id,
        "generated_at": utc_timestamp_iso(),
        "status": "success",
        "totals": {
            "countries_loaded": countries_loaded,
            "states_loaded": states_loaded,
            "cities_written": sum(entry.city_count for entry in files),
            "files_written": len(files),
        },
        "fallback_country_ids": sorted(fallback_country_ids),
        "files": [entry.to_dict() for entry in files],
    }
    try:
        write_json(report_path, payload)
    except OSError as exc:
        raise IoFailure(report_path, "write", exc) from exc
    return report_path
