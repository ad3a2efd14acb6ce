"""Fixed constants for the team form dataset builder."""

# ---- SofaScore API ----
SOFASCORE_API_BASE = "https://api.sofascore.com/api/v1"

# Present as an ordinary browser request; bare clients get blocked.
SOFASCORE_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Referer": "https://www.sofascore.com/",
    "Origin": "https://www.sofascore.com",
    "Accept": "application/json",
}

SEARCH_ENTITY_TYPE = "team"
SEARCH_SPORT_NAME = "Football"

# Statistics block holding full-match totals (others are per half)
FULL_MATCH_PERIOD = "ALL"

# ---- Aggregation ----
RECENT_MATCH_WINDOW = 8  # events analysed per team
CORNER_THRESHOLDS = (5.5, 7.5, 8.5, 9.5, 10.5)

# (group, item) lookups in priority order; group names differ by competition
STAT_LOOKUPS = {
    "corners": (("TVData", "Corner kicks"), ("Attack", "Corner kicks")),
    "shots": (("Shots", "Total shots"), ("Attack", "Total shots")),
    "shots_on_target": (("Shots", "Shots on target"), ("Attack", "Shots on target")),
    "yellow_cards": (("TVData", "Yellow cards"), ("Discipline", "Yellow cards")),
    "red_cards": (("TVData", "Red cards"), ("Discipline", "Red cards")),
}

# ---- Pacing (seconds) ----
EVENT_PAUSE_SECONDS = 0.8  # between per-event statistics fetches
ROW_PAUSE_SECONDS = 2.0  # between CSV rows

# ---- Files ----
INPUT_DIR = "./csvs"
INPUT_EXTENSION = ".csv"
OUTPUT_PATH = "db_times.json"
CSV_SEPARATOR = ";"

# CSV header names
COL_TEAM = "Team"
COL_LEAGUE = "League"
COL_PPG = "PPG_Total"
COL_GOALS_FOR = "GF_Total"
COL_CLEAN_SHEETS = "CleanSheets"
COL_SOFASCORE_ID = "sofascore_id"

CSV_COLUMNS = (COL_TEAM, COL_LEAGUE, COL_PPG, COL_GOALS_FOR, COL_CLEAN_SHEETS, COL_SOFASCORE_ID)
