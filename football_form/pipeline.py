"""
End-to-end run: season CSVs -> SofaScore id -> recent form -> db_times.json.
Rows are processed strictly one after another with courtesy pauses.
"""
from __future__ import annotations

import os
from datetime import datetime, timezone
from typing import Dict, List, Optional, Protocol, TypedDict

from .config import PipelineConfig, setup_logger
from .constants import (
    COL_CLEAN_SHEETS,
    COL_GOALS_FOR,
    COL_LEAGUE,
    COL_PPG,
    COL_SOFASCORE_ID,
    COL_TEAM,
)
from .csv_ingest import list_input_files, read_rows
from .match_stats import MatchStatsAggregator, TeamStatsSummary
from .output_writer import write_records
from .pacing import FixedPacer, Pacer
from .sofascore_client import SofascoreClient
from .team_resolver import TeamResolver

logger = setup_logger(__name__)


class TeamLookup(Protocol):
    def resolve(self, name: str) -> Optional[int]: ...


class StatsSource(Protocol):
    def aggregate(self, team_id: int) -> Optional[TeamStatsSummary]: ...


class CsvFields(TypedDict):
    pontos: str
    gols_pro: str
    clean_sheets: str


class OutputRecord(TypedDict):
    id: Optional[int]
    nome: str
    liga: str
    csv: CsvFields
    stats_live: Optional[TeamStatsSummary]
    updated_at: str


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC with milliseconds, e.g. 2025-01-31T12:00:00.000Z."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def prefetched_id(row: Dict[str, str]) -> Optional[int]:
    raw = (row.get(COL_SOFASCORE_ID) or "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("sofascore_id_invalid team=%s value=%s", row.get(COL_TEAM), raw)
        return None


def build_record(
    row: Dict[str, str],
    team_id: Optional[int],
    stats: Optional[TeamStatsSummary],
    now: Optional[datetime] = None,
) -> OutputRecord:
    return {
        "id": team_id,
        "nome": row.get(COL_TEAM, ""),
        "liga": row.get(COL_LEAGUE, ""),
        "csv": {
            "pontos": row.get(COL_PPG, ""),
            "gols_pro": row.get(COL_GOALS_FOR, ""),
            "clean_sheets": row.get(COL_CLEAN_SHEETS, ""),
        },
        "stats_live": stats,
        "updated_at": utc_timestamp(now),
    }


def process_row(
    row: Dict[str, str],
    resolver: TeamLookup,
    aggregator: StatsSource,
) -> OutputRecord:
    team_id = prefetched_id(row)
    if team_id is None:
        team_id = resolver.resolve(row.get(COL_TEAM, ""))

    stats: Optional[TeamStatsSummary] = None
    if team_id is not None:
        stats = aggregator.aggregate(team_id)
        logger.info("✅ %s: updated.", row.get(COL_TEAM, ""))
    return build_record(row, team_id, stats)


def run_pipeline(
    config: Optional[PipelineConfig] = None,
    *,
    client: Optional[SofascoreClient] = None,
    resolver: Optional[TeamLookup] = None,
    aggregator: Optional[StatsSource] = None,
    pacer: Optional[Pacer] = None,
    event_pacer: Optional[Pacer] = None,
) -> List[OutputRecord]:
    """Build one record per CSV row across every input file, in file then row order."""
    config = config or PipelineConfig.default()
    if resolver is None or aggregator is None:
        client = client or SofascoreClient(config.api_base, config.headers, config.timeout_s)
    resolver = resolver or TeamResolver(client)
    aggregator = aggregator or MatchStatsAggregator(
        client,
        event_pacer or FixedPacer(config.event_pause_s),
        window=config.window,
        thresholds=config.corner_thresholds,
        stat_lookups=config.stat_lookups,
    )
    row_pacer = pacer or FixedPacer(config.row_pause_s)

    records: List[OutputRecord] = []
    for path in list_input_files(config.input_dir, config.input_extension):
        rows = read_rows(path, config.csv_separator)
        logger.info("📂 Processing %s...", os.path.basename(path))
        for row in rows:
            records.append(process_row(row, resolver, aggregator))
            row_pacer.pause("row")

    logger.info(
        "run_complete rows=%d resolved=%d with_stats=%d",
        len(records),
        sum(1 for r in records if r["id"] is not None),
        sum(1 for r in records if r["stats_live"] is not None),
    )
    return records


def main(config: Optional[PipelineConfig] = None) -> int:
    config = config or PipelineConfig.default()
    records = run_pipeline(config)
    write_records(records, config.output_path)
    logger.info("💾 Saved %d records to %s", len(records), config.output_path)
    return 0
