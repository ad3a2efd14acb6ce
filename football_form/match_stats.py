"""Recent-form aggregation over a team's latest SofaScore events.

Each event's full-match statistics block is folded into a running aggregate;
the aggregate is then reduced to averages and corner over-line percentages.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Optional, Sequence, Tuple, TypedDict

from .config import setup_logger
from .constants import CORNER_THRESHOLDS, FULL_MATCH_PERIOD, RECENT_MATCH_WINDOW, STAT_LOOKUPS
from .pacing import NoopPacer, Pacer
from .sofascore_client import SofascoreClient

logger = setup_logger(__name__)

_LEADING_NUMBER = re.compile(r"^\s*([-+]?(?:\d+(?:\.\d*)?|\.\d+))")


class CornersSummary(TypedDict):
    avg: str
    over_55: int
    over_75: int
    over_85: int
    over_95: int
    over_105: int


class ShotsSummary(TypedDict):
    avg: str
    ot: str


class CardsSummary(TypedDict):
    yellow: str
    red: str


class TeamStatsSummary(TypedDict):
    corners: CornersSummary
    shots: ShotsSummary
    cards: CardsSummary


def threshold_key(threshold: float) -> str:
    """5.5 -> 'over_55', 10.5 -> 'over_105'."""
    return "over_" + f"{threshold:g}".replace(".", "")


def round_half_up(value: float, places: int = 2) -> Decimal:
    quantum = Decimal(1).scaleb(-places)
    return Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)


def format_average(total: float, count: int) -> str:
    if count <= 0:
        return "0.00"
    return f"{round_half_up(total / count):.2f}"


def percentage(hits: int, count: int) -> int:
    if count <= 0:
        return 0
    return int(round_half_up(100.0 * hits / count, 0))


def parse_stat_value(raw: Any) -> Optional[float]:
    """Leading-number parse of an upstream value ('6' -> 6.0, '55%' -> 55.0)."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return float(raw)
    match = _LEADING_NUMBER.match(str(raw))
    if not match:
        return None
    return float(match.group(1))


def find_full_match_block(payload: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    blocks = (payload or {}).get("statistics")
    if not isinstance(blocks, list):
        return None
    for block in blocks:
        if isinstance(block, dict) and block.get("period") == FULL_MATCH_PERIOD:
            return block
    return None


def lookup_stat(
    block: Dict[str, Any],
    side: str,
    candidates: Sequence[Tuple[str, str]],
) -> Optional[float]:
    """Try each (group, item) pair in order; None when every pair is missing."""
    groups = [g for g in (block.get("groups") or []) if isinstance(g, dict)]
    for group_name, item_name in candidates:
        for group in groups:
            if group.get("groupName") != group_name:
                continue
            for item in group.get("statisticsItems") or []:
                if not isinstance(item, dict) or item.get("name") != item_name:
                    continue
                value = parse_stat_value(item.get(side))
                if value is None:
                    value = parse_stat_value(item.get(f"{side}Value"))
                if value is not None:
                    return value
    return None


def team_side(team_id: int, event: Dict[str, Any]) -> str:
    home_id = event["homeTeam"]["id"]
    return "home" if int(home_id) == int(team_id) else "away"


@dataclass
class RunningAggregate:
    thresholds: Tuple[float, ...] = CORNER_THRESHOLDS
    matches_counted: int = 0
    corners_sum: float = 0.0
    corners_over: List[int] = field(default_factory=list)
    shots_sum: float = 0.0
    shots_on_target_sum: float = 0.0
    yellow_sum: float = 0.0
    red_sum: float = 0.0

    def __post_init__(self) -> None:
        if not self.corners_over:
            self.corners_over = [0] * len(self.thresholds)

    def add_match(self, values: Dict[str, float]) -> None:
        corners = values.get("corners", 0.0)
        self.matches_counted += 1
        self.corners_sum += corners
        # cumulative: 11 corners counts for every line up to 10.5
        for idx, line in enumerate(self.thresholds):
            if corners > line:
                self.corners_over[idx] += 1
        self.shots_sum += values.get("shots", 0.0)
        self.shots_on_target_sum += values.get("shots_on_target", 0.0)
        self.yellow_sum += values.get("yellow_cards", 0.0)
        self.red_sum += values.get("red_cards", 0.0)

    def summary(self) -> Optional[TeamStatsSummary]:
        n = self.matches_counted
        if n == 0:
            return None
        corners: Dict[str, Any] = {"avg": format_average(self.corners_sum, n)}
        for line, hits in zip(self.thresholds, self.corners_over):
            corners[threshold_key(line)] = percentage(hits, n)
        return {
            "corners": corners,  # type: ignore[typeddict-item]
            "shots": {
                "avg": format_average(self.shots_sum, n),
                "ot": format_average(self.shots_on_target_sum, n),
            },
            "cards": {
                "yellow": format_average(self.yellow_sum, n),
                "red": format_average(self.red_sum, n),
            },
        }


class MatchStatsAggregator:
    def __init__(
        self,
        client: SofascoreClient,
        pacer: Optional[Pacer] = None,
        *,
        window: int = RECENT_MATCH_WINDOW,
        thresholds: Tuple[float, ...] = CORNER_THRESHOLDS,
        stat_lookups: Optional[Dict[str, Tuple[Tuple[str, str], ...]]] = None,
    ) -> None:
        self.client = client
        self.pacer = pacer or NoopPacer()
        self.window = window
        self.thresholds = tuple(thresholds)
        self.stat_lookups = dict(stat_lookups or STAT_LOOKUPS)

    def recent_events(self, team_id: int) -> List[Dict[str, Any]]:
        """Newest-first as returned upstream, capped to the window."""
        result = self.client.team_last_events(team_id)
        if not result.ok:
            return []
        events = (result.data or {}).get("events") or []
        if not isinstance(events, list):
            return []
        return [e for e in events if isinstance(e, dict)][: max(self.window, 0)]

    def event_values(self, team_id: int, event: Dict[str, Any]) -> Optional[Dict[str, float]]:
        """Per-category values for one event; None when it has no full-match block.

        A failed statistics fetch raises APIError, which aggregate() treats as a skip.
        """
        payload = self.client.event_statistics(event["id"]).unwrap()
        block = find_full_match_block(payload)
        if block is None:
            logger.debug("event=%s no %s statistics block", event.get("id"), FULL_MATCH_PERIOD)
            return None
        side = team_side(team_id, event)
        return {
            category: lookup_stat(block, side, candidates) or 0.0
            for category, candidates in self.stat_lookups.items()
        }

    def aggregate(self, team_id: int) -> Optional[TeamStatsSummary]:
        events = self.recent_events(team_id)
        if not events:
            return None

        running = RunningAggregate(thresholds=self.thresholds)
        for event in events:
            try:
                values = self.event_values(team_id, event)
            except Exception as exc:
                logger.debug("team=%s event=%s skipped: %s", team_id, event.get("id"), exc)
                values = None
            finally:
                self.pacer.pause("event")
            if values is not None:
                running.add_match(values)

        logger.debug(
            "team=%s events=%d counted=%d", team_id, len(events), running.matches_counted
        )
        return running.summary()
