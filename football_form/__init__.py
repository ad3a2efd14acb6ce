"""Season CSVs merged with SofaScore recent form into a JSON team dataset."""
import logging
import os

__version__ = "0.1.0"

if not logging.getLogger().handlers:
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

for _noisy in ("urllib3", "requests"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
