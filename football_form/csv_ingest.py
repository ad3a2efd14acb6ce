"""Discovery and parsing of the semicolon-delimited season CSVs."""
from __future__ import annotations

import os
from typing import Dict, List

import pandas as pd

from .config import setup_logger
from .constants import CSV_COLUMNS, CSV_SEPARATOR, INPUT_EXTENSION

logger = setup_logger(__name__)


def list_input_files(input_dir: str, extension: str = INPUT_EXTENSION) -> List[str]:
    """Sorted CSV paths in input_dir; the directory is created when missing."""
    os.makedirs(input_dir, exist_ok=True)
    names = sorted(
        name
        for name in os.listdir(input_dir)
        if name.lower().endswith(extension.lower())
        and os.path.isfile(os.path.join(input_dir, name))
    )
    return [os.path.join(input_dir, name) for name in names]


def read_rows(path: str, separator: str = CSV_SEPARATOR) -> List[Dict[str, str]]:
    """Rows as plain string dicts; known columns absent from the header read as ''."""
    options = dict(
        sep=separator, dtype=str, keep_default_na=False, encoding="utf-8-sig", index_col=False
    )
    try:
        header = pd.read_csv(path, nrows=0, **options).columns
    except pd.errors.EmptyDataError:
        logger.warning("csv_empty path=%s", path)
        return []

    # rows ending in a stray separator carry more fields than the header;
    # extra trailing fields are dropped and the first column never becomes the index
    frame = pd.read_csv(
        path,
        skipinitialspace=True,
        usecols=range(len(header)),
        **options,
    )

    frame.columns = [str(col).strip() for col in frame.columns]
    for column in CSV_COLUMNS:
        if column not in frame.columns:
            frame[column] = ""
    return [
        {key: ("" if value is None else str(value).strip()) for key, value in record.items()}
        for record in frame.to_dict(orient="records")
    ]
