"""Dataset ingestion: JSON loader with field aliasing and CSV conversion."""

from .csv_converter import convert_csv_file, detect_delimiter, parse_csv_text
from .loader import (
    FIELD_ALIASES,
    extract_rows,
    load_dataset_file,
    parse_records,
    resolve_field,
    row_to_fragrance,
)

__all__ = [
    "FIELD_ALIASES",
    "convert_csv_file",
    "detect_delimiter",
    "extract_rows",
    "load_dataset_file",
    "parse_csv_text",
    "parse_records",
    "resolve_field",
    "row_to_fragrance",
]
