"""Offline conversion of CSV dataset exports to the JSON dataset format.

Exports come either comma- or semicolon-separated; the delimiter is
picked from whichever appears more often in the header line.
"""

import csv
import io
import json
from pathlib import Path
from typing import Dict, List

from tqdm import tqdm

from scentlocker.utils.exceptions import DatasetFormatError, DatasetLoadError
from scentlocker.utils.logger import get_logger

logger = get_logger(__name__)


def detect_delimiter(header_line: str) -> str:
    """Semicolon if it outnumbers commas in the header, else comma."""
    return ";" if header_line.count(";") > header_line.count(",") else ","


def parse_csv_text(text: str, show_progress: bool = False) -> List[Dict[str, str]]:
    """
    Parse CSV content into one dict per data row.

    Quoted fields may contain the delimiter. Blank lines are skipped,
    values are trimmed, and cells beyond the header width are dropped.

    Raises:
        DatasetFormatError: If the content has no header line.
    """
    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        raise DatasetFormatError("CSV file is empty")

    delimiter = detect_delimiter(lines[0])
    logger.info(f"Detected delimiter: {'semicolon' if delimiter == ';' else 'comma'}")

    reader = csv.reader(io.StringIO("\n".join(lines)), delimiter=delimiter, quotechar='"')
    headers = [h.strip() for h in next(reader)]
    logger.info(f"Found {len(headers)} columns: {', '.join(headers[:5])}...")

    rows: List[Dict[str, str]] = []
    for cells in tqdm(reader, desc="Converting rows", disable=not show_progress):
        rows.append({header: value.strip() for header, value in zip(headers, cells)})

    return rows


def convert_csv_file(input_path: str | Path, output_path: str | Path, show_progress: bool = False) -> int:
    """
    Convert a CSV export into a JSON array file.

    Args:
        input_path: CSV file to read
        output_path: JSON file to write; parent directories are created

    Returns:
        Number of records written

    Raises:
        DatasetLoadError: If the input file doesn't exist
        DatasetFormatError: If the input is empty
    """
    input_path = Path(input_path)
    output_path = Path(output_path)

    if not input_path.exists():
        raise DatasetLoadError(f"CSV file not found: {input_path}", path=str(input_path))

    with open(input_path, 'r', encoding='utf-8-sig', newline='') as f:
        rows = parse_csv_text(f.read(), show_progress=show_progress)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(rows, f, indent=2, ensure_ascii=False)

    logger.info(f"Converted {len(rows)} records from {input_path} to {output_path}")
    return len(rows)
