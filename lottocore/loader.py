"""
Historical record loading for lottocore.

The engines never touch files. This module is the edge adapter a host uses
to turn seed files into HistoricalRecord values, and to turn records into a
long-format pandas DataFrame for the statistics aggregator.

Supported JSON layouts:
    [ {"id": 1, "date": "29/09/2003", "numbers": [2, 3, 5, ...]}, ... ]
    {"schemaVersion": "1.0", "contests": [ ... ]}

Each JSON record accepts "id" or "contestNumber", "numbers" or "draw", and
optional "secondDrawNumbers", "teamNumber" and "date".

CSV files use the columns sequence_id, n1..nK, optional s1..sK for the
second draw, optional companion and date.
"""
import json
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

import pandas as pd
from loguru import logger

from lottocore.config import SUPPORTED_SCHEMA_VERSION
from lottocore.models import HistoricalRecord, LotteryType, RecordFormatError
from lottocore.profiles import BUILTIN_PROFILES

FRAME_COLUMNS = ["sequence_id", "number"]

_FIRST_DRAW_COL = re.compile(r"^n(\d+)$")
_SECOND_DRAW_COL = re.compile(r"^s(\d+)$")

# draws of these variants are positional and keep their column order
COLUMNAR_TYPES = frozenset(p.type for p in BUILTIN_PROFILES if p.is_columnar)


def records_to_frame(records: Iterable[HistoricalRecord]) -> pd.DataFrame:
    """
    Flattens records into one row per (sequence_id, number), using the
    distinct union of both draws for dual-draw records.
    """
    rows = [
        (record.sequence_id, number)
        for record in records
        for number in record.all_numbers()
    ]
    if not rows:
        return pd.DataFrame(
            {"sequence_id": pd.Series(dtype="int64"), "number": pd.Series(dtype="int64")}
        )
    return pd.DataFrame(rows, columns=FRAME_COLUMNS).astype("int64")


def _draw_order(numbers, lottery_type: Optional[LotteryType]) -> Tuple[int, ...]:
    if lottery_type in COLUMNAR_TYPES:
        return tuple(int(n) for n in numbers)
    return tuple(sorted(int(n) for n in numbers))


def parse_record(raw: Dict[str, Any], lottery_type: Optional[LotteryType] = None) -> HistoricalRecord:
    """
    Builds a HistoricalRecord from one raw JSON object.

    Raises:
        RecordFormatError: If the object lacks a positive id or any numbers.
    """
    sequence_id = raw.get("id") or raw.get("contestNumber") or 0
    numbers = raw.get("numbers") or raw.get("draw") or []
    second = raw.get("secondDrawNumbers")

    if not isinstance(sequence_id, int) or sequence_id <= 0:
        raise RecordFormatError(f"Record id must be a positive integer, got {sequence_id!r}")
    if not numbers:
        raise RecordFormatError(f"Record {sequence_id} has no numbers")
    if second is not None and not second:
        raise RecordFormatError(f"Record {sequence_id} has an empty secondDrawNumbers")

    return HistoricalRecord(
        sequence_id=sequence_id,
        draw_numbers=_draw_order(numbers, lottery_type),
        second_draw_numbers=_draw_order(second, lottery_type) if second else None,
        companion_value=raw.get("teamNumber"),
        lottery_type=lottery_type,
        draw_date=raw.get("date"),
    )


def parse_records_json(text: str, lottery_type: Optional[LotteryType] = None) -> List[HistoricalRecord]:
    """Parses either JSON layout into records."""
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise RecordFormatError(f"Invalid JSON: {e}") from e

    if isinstance(payload, list):
        raw_records = payload
    elif isinstance(payload, dict):
        version = payload.get("schemaVersion")
        if version is not None and version != SUPPORTED_SCHEMA_VERSION:
            raise RecordFormatError(f"Unsupported schemaVersion: {version}")
        raw_records = payload.get("contests")
        if raw_records is None:
            raise RecordFormatError("Object layout without 'contests'")
    else:
        raise RecordFormatError("Expected a JSON array or object")

    return [parse_record(raw, lottery_type) for raw in raw_records]


def load_records_json(
    path: Union[str, Path], lottery_type: Optional[LotteryType] = None
) -> List[HistoricalRecord]:
    """Loads records from a JSON seed file."""
    p = Path(path)
    logger.info(f"Loading historical records from {p}")
    records = parse_records_json(p.read_text(encoding="utf-8"), lottery_type)
    logger.info(f"Loaded {len(records)} records from {p}")
    return records


def _numbered_columns(columns, pattern) -> List[str]:
    found = [(int(m.group(1)), col) for col in columns if (m := pattern.match(col))]
    return [col for _, col in sorted(found)]


def load_records_csv(
    path: Union[str, Path], lottery_type: Optional[LotteryType] = None
) -> List[HistoricalRecord]:
    """
    Loads records from a CSV file. Rows that cannot form a valid record are
    skipped with a warning.
    """
    p = Path(path)
    logger.info(f"Loading historical records from {p}")
    df = pd.read_csv(p)
    df.columns = [str(c).strip().lower() for c in df.columns]

    first_cols = _numbered_columns(df.columns, _FIRST_DRAW_COL)
    second_cols = _numbered_columns(df.columns, _SECOND_DRAW_COL)
    if "sequence_id" not in df.columns or not first_cols:
        raise RecordFormatError(
            f"CSV needs 'sequence_id' and n1..nK columns. Got: {df.columns.tolist()}"
        )

    records: List[HistoricalRecord] = []
    skipped = 0
    for row in df.itertuples(index=False):
        values = row._asdict()
        try:
            numbers = [int(values[c]) for c in first_cols if pd.notna(values[c])]
            second = [int(values[c]) for c in second_cols if pd.notna(values[c])]
            companion = values.get("companion")
            date = values.get("date")
            records.append(
                HistoricalRecord(
                    sequence_id=int(values["sequence_id"]),
                    draw_numbers=_draw_order(numbers, lottery_type),
                    second_draw_numbers=_draw_order(second, lottery_type) if second else None,
                    companion_value=int(companion) if companion is not None and pd.notna(companion) else None,
                    lottery_type=lottery_type,
                    draw_date=str(date) if date is not None and pd.notna(date) else None,
                )
            )
        except (TypeError, ValueError) as e:
            skipped += 1
            logger.warning(f"Skipping malformed row {values}: {e}")

    if skipped:
        logger.warning(f"Skipped {skipped} malformed rows in {p}")
    logger.info(f"Loaded {len(records)} records from {p}")
    return records


def load_records(
    path: Union[str, Path], lottery_type: Optional[LotteryType] = None
) -> List[HistoricalRecord]:
    """Loads records from a .json or .csv file based on its suffix."""
    suffix = Path(path).suffix.lower()
    if suffix == ".json":
        return load_records_json(path, lottery_type)
    if suffix == ".csv":
        return load_records_csv(path, lottery_type)
    raise RecordFormatError(f"Unsupported record file type: {suffix or path}")
