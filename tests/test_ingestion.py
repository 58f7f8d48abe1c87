import json

import pytest
import sqlalchemy as sa

from dqprofile.ingestion import (
    IngestionError,
    load_csv,
    load_file,
    load_from_source,
    load_json,
    process_file,
)
from dqprofile.inference import DataType
from dqprofile.issues import IssueType


CSV_BYTES = b"name,age,email\nJohn,30,john@example.com\n,25,jane@example.com\n\nBob,,bob@example.com\n"


class TestCsv:
    def test_cells_stay_text(self):
        records = load_csv(CSV_BYTES)

        assert len(records) == 3
        assert records[0] == {"name": "John", "age": "30", "email": "john@example.com"}

    def test_empty_cells_are_absent(self):
        records = load_csv(CSV_BYTES)
        assert records[1]["name"] is None
        assert records[2]["age"] is None

    def test_na_strings_are_not_special(self):
        records = load_csv("code\nNA\nN/A\n")
        assert [r["code"] for r in records] == ["NA", "N/A"]

    def test_empty_input(self):
        assert load_csv(b"") == []

    def test_header_whitespace_trimmed(self):
        records = load_csv(b"name , age\nJohn,30\n")
        assert list(records[0]) == ["name", "age"]
        assert records[0] == {"name": "John", "age": "30"}

    def test_utf8_bom(self):
        records = load_csv("\ufeffid\n1\n".encode("utf-8"))
        assert list(records[0]) == ["id"]


class TestJson:
    def test_array(self):
        rows = load_json('[{"a": 1}, {"a": null}]')
        assert rows == [{"a": 1}, {"a": None}]

    def test_single_array_property(self):
        rows = load_json(json.dumps({"data": [{"a": 1}, {"a": 2}]}))
        assert rows == [{"a": 1}, {"a": 2}]

    def test_object_is_single_record(self):
        rows = load_json('{"a": 1, "b": 2}')
        assert rows == [{"a": 1, "b": 2}]

    def test_empty_array(self):
        with pytest.raises(IngestionError, match="empty"):
            load_json("[]")

    def test_scalar(self):
        with pytest.raises(IngestionError, match="object or array"):
            load_json("5")

    def test_non_object_rows(self):
        with pytest.raises(IngestionError):
            load_json("[1, 2, 3]")

    def test_invalid(self):
        with pytest.raises(IngestionError, match="JSON parsing error"):
            load_json("{not json")


class TestLoadFile:
    def test_dispatch(self):
        assert len(load_file("people.CSV", CSV_BYTES)) == 3
        assert load_file("rows.json", b'[{"a": 1}]') == [{"a": 1}]

    def test_excel_not_supported(self):
        with pytest.raises(IngestionError, match="Excel"):
            load_file("book.xlsx", b"")

    def test_unknown_extension(self):
        with pytest.raises(IngestionError, match="Unsupported file format: txt"):
            load_file("notes.txt", b"")


class TestProcessFile:
    def test_csv_analysis(self):
        analysis = process_file("people.csv", CSV_BYTES)

        assert analysis.row_count == 3
        assert analysis.column_count == 3
        assert analysis.file_size == len(CSV_BYTES)
        assert analysis.report.total_rows == 3
        assert analysis.report.column_metrics["age"].data_type is DataType.NUMBER
        assert any(i.type is IssueType.MISSING_VALUES for i in analysis.report.issues)

    def test_empty_file(self):
        with pytest.raises(IngestionError, match="empty"):
            process_file("empty.csv", b"name,age\n")


def test_load_from_sqlite(tmp_path):
    db_path = tmp_path / "dq.db"
    engine = sa.create_engine(f"sqlite:///{db_path}")
    with engine.begin() as conn:
        conn.execute(sa.text("CREATE TABLE people (name TEXT, age INTEGER)"))
        conn.execute(sa.text("INSERT INTO people VALUES ('John', 30), (NULL, 25)"))
    engine.dispose()

    records = load_from_source("SQLite", "", "", "", "", str(db_path), "people")

    assert records == [{"name": "John", "age": 30}, {"name": None, "age": 25}]


def test_unsupported_db_type():
    with pytest.raises(IngestionError, match="Unsupported db_type"):
        load_from_source("oracle", "h", "1", "u", "p", "d", "t")
