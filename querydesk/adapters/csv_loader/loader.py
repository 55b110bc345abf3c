"""CSV loader — reads and normalizes the agents roster."""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from querydesk.adapters.csv_loader.normalizer import (
    clean_string,
    normalize_column_name,
    normalize_email,
)

logger = logging.getLogger(__name__)


def _sniff_dialect(sample: str) -> type[csv.Dialect]:
    """Pick the delimiter (comma/semicolon/tab) that appears most in the header."""
    first_line = sample.splitlines()[0] if sample else ""
    counts = {d: first_line.count(d) for d in (";", ",", "\t")}
    best_delim = max(counts, key=counts.get)
    if counts[best_delim] == 0:
        return csv.excel

    class DynamicDialect(csv.excel):
        delimiter = best_delim

    return DynamicDialect


def _read_csv(file_path: Path, encoding: str = "utf-8-sig") -> list[dict[str, str | None]]:
    """Read a CSV file with BOM handling and column normalization."""
    with open(file_path, encoding=encoding, newline="") as f:
        sample = f.read(4096)
        f.seek(0)
        reader = csv.DictReader(f, dialect=_sniff_dialect(sample))
        if reader.fieldnames is None:
            raise ValueError(f"CSV file {file_path} has no header row")

        col_map = {col: normalize_column_name(col) for col in reader.fieldnames}
        rows = [
            {col_map[k]: clean_string(v) for k, v in raw_row.items() if k is not None}
            for raw_row in reader
        ]

    logger.info("Loaded %d rows from %s (columns: %s)", len(rows), file_path.name, list(col_map.values()))
    return rows


def load_agents(file_path: Path) -> list[dict]:
    """Load the agents CSV.

    Accepted columns (after normalization): name / имя / фио, email / почта.
    Rows missing a name or a valid email are skipped.
    """
    agents = []
    for line_no, row in enumerate(_read_csv(file_path), start=2):
        name = row.get("name") or row.get("имя") or row.get("фио")
        email = normalize_email(row.get("email") or row.get("почта") or row.get("e_mail"))
        if not name or not email:
            logger.warning("Line %d: missing name or email, skipping", line_no)
            continue
        agents.append({"name": name, "email": email})
    logger.info("Parsed %d agents", len(agents))
    return agents
