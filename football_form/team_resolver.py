from typing import Any, Dict, Optional

from .config import setup_logger
from .constants import SEARCH_ENTITY_TYPE, SEARCH_SPORT_NAME
from .sofascore_client import SofascoreClient

logger = setup_logger(__name__)


def pick_football_team(results: Any) -> Optional[int]:
    """Return the id of the first football team entity in a search payload."""
    if not isinstance(results, list):
        return None
    for row in results:
        if not isinstance(row, dict) or row.get("type") != SEARCH_ENTITY_TYPE:
            continue
        entity = row.get("entity") or {}
        sport = (entity.get("sport") or {}).get("name")
        if sport != SEARCH_SPORT_NAME:
            continue
        try:
            return int(entity.get("id"))
        except (TypeError, ValueError):
            continue
    return None


class TeamResolver:
    """Resolves a team name to its SofaScore id. No cache, no retry."""

    def __init__(self, client: SofascoreClient) -> None:
        self.client = client

    def resolve(self, name: Optional[str]) -> Optional[int]:
        if not name or not name.strip():
            return None
        logger.info("🔎 Looking up SofaScore id: %s...", name)
        result = self.client.search(name)
        if not result.ok:
            return None
        payload: Dict[str, Any] = result.data or {}
        team_id = pick_football_team(payload.get("results"))
        if team_id is None:
            logger.info("team_not_found name=%s", name)
        return team_id
