from __future__ import annotations

import json
import os
import tempfile
from typing import Any, List, Sequence


def write_records(records: Sequence[Any], path: str) -> None:
    """Write all records as one indented JSON array, replacing any prior file."""
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(prefix=".db_", suffix=".json.tmp", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(list(records), fh, indent=2, ensure_ascii=False)
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


def read_records(path: str) -> List[Any]:
    with open(path, "r", encoding="utf-8") as fh:
        return json.load(fh)
