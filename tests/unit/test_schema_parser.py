"""Unit tests for column spec parsing."""

from __future__ import annotations

import pytest

from jsondb.domain.entities import Column
from jsondb.domain.services import format_column_spec, parse_column_spec
from jsondb.domain.value_objects import ColumnType
from jsondb.ports.inbound.table_store import InvalidSchemaError, TableStoreError


@pytest.mark.unit
class TestParseColumnSpec:
    """Tests for parse_column_spec."""

    def test_parse_in_declaration_order(self) -> None:
        columns = parse_column_spec("name:string,age:number")

        assert columns == [Column("name", "string"), Column("age", "number")]

    def test_whitespace_is_trimmed(self) -> None:
        columns = parse_column_spec("  name : string ,  age:number  ")

        assert [c.name for c in columns] == ["name", "age"]
        assert [c.type for c in columns] == ["string", "number"]

    def test_unknown_type_is_kept(self) -> None:
        """Type tokens are advisory and round-trip unchanged."""
        columns = parse_column_spec("blob:binary")

        assert columns[0].type == "binary"
        assert ColumnType.parse(columns[0].type) is None

    def test_known_type_resolves(self) -> None:
        columns = parse_column_spec("when:date")

        assert ColumnType.parse(columns[0].type) == ColumnType.DATE

    def test_extra_colon_parts_ignored(self) -> None:
        columns = parse_column_spec("name:string:extra")

        assert columns == [Column("name", "string")]

    @pytest.mark.parametrize(
        "spec",
        [
            "name",
            "name:string,age",
            ":string",
            "name:",
            "name : ",
            "",
            "name:string,,age:number",
        ],
    )
    def test_malformed_entry_raises(self, spec: str) -> None:
        with pytest.raises(InvalidSchemaError):
            parse_column_spec(spec)

    def test_error_is_store_error(self) -> None:
        with pytest.raises(TableStoreError):
            parse_column_spec("oops")

    def test_non_string_spec_raises(self) -> None:
        with pytest.raises(InvalidSchemaError):
            parse_column_spec(None)  # type: ignore[arg-type]


@pytest.mark.unit
class TestFormatColumnSpec:
    """Tests for format_column_spec."""

    def test_format_columns(self) -> None:
        spec = format_column_spec([Column("name", "string"), Column("age", "number")])

        assert spec == "name:string,age:number"

    def test_format_dicts(self) -> None:
        spec = format_column_spec([{"name": "tags", "type": "array"}])

        assert spec == "tags:array"

    def test_format_then_parse(self) -> None:
        columns = [Column("a", "string"), Column("b", "boolean")]

        assert parse_column_spec(format_column_spec(columns)) == columns
