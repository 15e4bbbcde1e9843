"""End-to-end orchestration: load both catalogs, partition, report."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from city_coords.common.config_loader import PipelineConfig
from city_coords.common.errors import IoFailure
from city_coords.common.fs import ensure_dir
from city_coords.common.logging import log_event
from city_coords.common.models import WrittenFile
from city_coords.pipeline.loaders import load_country_index, load_states
from city_coords.pipeline.partition import group_states_by_country, write_country_files
from city_coords.pipeline.reports import write_run_summary


@dataclass
class PipelineResult:
    run_id: str
    countries_loaded: int
    states_loaded: int
    files: list[WrittenFile] = field(default_factory=list)
    fallback_country_ids: list[int] = field(default_factory=list)


def run_pipeline(config: PipelineConfig, logger: logging.Logger, run_id: str) -> PipelineResult:
    try:
        ensure_dir(config.out_dir)
    except OSError as exc:
        raise IoFailure(config.out_dir, "mkdir", exc) from exc

    log_event(
        logger,
        f"Loading countries from {config.countries_path}",
        run_id=run_id,
        stage="load_countries",
        event="LOAD_START",
        status="ok",
        path=str(config.countries_path),
    )
    country_index = load_country_index(
        config.raw_dir,
        filename=config.countries_filename,
        max_size=config.max_file_size,
    )
    log_event(
        logger,
        f"Loaded {len(country_index)} countries",
        run_id=run_id,
        stage="load_countries",
        event="LOAD_END",
        status="ok",
        rows_out=len(country_index),
    )

    log_event(
        logger,
        f"Loading states and cities from {config.regions_path}",
        run_id=run_id,
        stage="load_states",
        event="LOAD_START",
        status="ok",
        path=str(config.regions_path),
    )
    states = load_states(
        config.raw_dir,
        filename=config.regions_filename,
        max_size=config.max_file_size,
    )
    log_event(
        logger,
        f"Loaded {len(states)} states",
        run_id=run_id,
        stage="load_states",
        event="LOAD_END",
        status="ok",
        rows_out=len(states),
    )

    by_country = group_states_by_country(states)
    fallback_ids = [country_id for country_id in by_country if country_id not in country_index]
    files = write_country_files(
        by_country,
        country_index,
        config.out_dir,
        fallback_code=config.fallback_code,
        sort_groups=config.sort_groups,
        logger=logger,
        run_id=run_id,
    )

    result = PipelineResult(
        run_id=run_id,
        countries_loaded=len(country_index),
        states_loaded=len(states),
        files=files,
        fallback_country_ids=fallback_ids,
    )
    if config.report_path is not None:
        write_run_summary(
            config.report_path,
            run_id=run_id,
            countries_loaded=result.countries_loaded,
            states_loaded=result.states_loaded,
            files=files,
            fallback_country_ids=fallback_ids,
        )
    return result
