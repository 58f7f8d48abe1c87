# dqprofile/ingestion.py
"""
Turn uploaded files or database tables into records for the engine.

Values are handed over as decoded: CSV cells stay text, JSON keeps its own
scalars. Type inference is the engine's job, so nothing is coerced here.
"""
import io
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Union

import pandas as pd
import sqlalchemy as sa

from .columns import dataframe_to_records
from .engine import QualityReport, analyze_data_quality

logger = logging.getLogger(__name__)

Source = Union[bytes, str]


class IngestionError(ValueError):
    """Raised when an upload can't be turned into a list of records."""


@dataclass
class FileAnalysis:
    records: List[Dict[str, Any]]
    report: QualityReport
    file_name: str
    file_size: int
    row_count: int
    column_count: int


def _as_text(source: Source) -> str:
    if isinstance(source, bytes):
        return source.decode("utf-8-sig")
    return source


def load_csv(source: Source) -> List[Dict[str, Any]]:
    """Header row + data rows; every cell read as text, blank lines skipped."""
    try:
        df = pd.read_csv(
            io.StringIO(_as_text(source)),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError:
        return []
    except (pd.errors.ParserError, UnicodeDecodeError) as e:
        raise IngestionError(f"CSV parsing error: {e}") from e
    df.columns = [str(c).strip() for c in df.columns]
    return dataframe_to_records(df)


def load_json(source: Source) -> List[Dict[str, Any]]:
    """
    Accepts:
      - an array of objects
      - an object with a single array-valued key (that array is used)
      - any other object (treated as a single record)
    """
    try:
        data = json.loads(_as_text(source))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise IngestionError(f"JSON parsing error: {e}") from e

    if isinstance(data, list):
        rows = data
    elif isinstance(data, dict):
        keys = list(data)
        if len(keys) == 1 and isinstance(data[keys[0]], list):
            rows = data[keys[0]]
        else:
            rows = [data]
    else:
        raise IngestionError("JSON parsing error: JSON must be an object or array")

    if not rows:
        raise IngestionError("JSON parsing error: JSON file appears to be empty")
    if not all(isinstance(r, dict) for r in rows):
        raise IngestionError("JSON parsing error: every record must be an object")
    return rows


def load_file(file_name: str, data: Source) -> List[Dict[str, Any]]:
    extension = file_name.rsplit(".", 1)[-1].lower() if "." in file_name else ""
    if extension == "csv":
        return load_csv(data)
    if extension == "json":
        return load_json(data)
    if extension == "xlsx":
        raise IngestionError("Excel file support coming soon. Please use CSV or JSON format.")
    raise IngestionError(f"Unsupported file format: {extension}")


def process_file(file_name: str, data: Source) -> FileAnalysis:
    """Decode an upload and profile it."""
    records = load_file(file_name, data)
    if not records:
        raise IngestionError("File appears to be empty or could not be parsed")

    logger.info("Loaded %s: %d records", file_name, len(records))
    report = analyze_data_quality(records)

    return FileAnalysis(
        records=records,
        report=report,
        file_name=file_name,
        file_size=len(data),
        row_count=len(records),
        column_count=len(records[0]),
    )


def _make_sqlalchemy_engine(db_type: str, host: str, port: str, user: str, password: str, database: str):
    db_type = db_type.lower()
    if db_type == "postgresql":
        url = f"postgresql+psycopg2://{user}:{password}@{host}:{port}/{database}"
    elif db_type == "mysql":
        url = f"mysql+pymysql://{user}:{password}@{host}:{port}/{database}"
    elif db_type == "snowflake":
        # host is the account identifier
        url = f"snowflake://{user}:{password}@{host}/{database}"
    elif db_type == "sqlite":
        url = f"sqlite:///{database}"
    else:
        raise IngestionError(f"Unsupported db_type: {db_type}")
    return sa.create_engine(url)


def load_from_source(
    db_type: str,
    host: str,
    port: str,
    user: str,
    password: str,
    database: str,
    table_or_query: str,
) -> List[Dict[str, Any]]:
    """
    db_type: 'PostgreSQL' | 'MySQL' | 'Snowflake' | 'SQLite'
    table_or_query: either a plain table name or a full SQL query
    """
    engine = _make_sqlalchemy_engine(db_type, host, port, user, password, database)

    with engine.connect() as conn:
        text = table_or_query.strip()
        if " " in text:
            df = pd.read_sql(sa.text(text), conn)
        else:
            df = pd.read_sql(sa.text(f"SELECT * FROM {text}"), conn)

    logger.info("Loaded %d rows from %s", len(df), db_type)
    return dataframe_to_records(df)
