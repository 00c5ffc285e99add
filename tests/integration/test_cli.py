"""Integration tests for the command-line adapter."""

from __future__ import annotations

import io
import json
import logging
from pathlib import Path

import pytest
import structlog
from rich.console import Console

from jsondb.adapters.inbound.cli import InteractiveSession, build_parser, main
from jsondb.application import TableStore
from jsondb.infrastructure.container import Container


@pytest.fixture(autouse=True)
def reset_container():
    """Give every test a fresh container and undo main()'s logging setup."""
    Container.reset()
    yield
    Container.reset()
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in root.handlers[:]:
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)


def run_cli(capsys: pytest.CaptureFixture[str], data_dir: Path, *argv: str) -> tuple[int, str, str]:
    """Run one CLI command and return (exit code, stdout, stderr)."""
    code = main(["--data-dir", str(data_dir), *argv])
    captured = capsys.readouterr()
    return code, captured.out, captured.err


def run_session(store: TableStore, *answers: str) -> str:
    """Drive an interactive session with scripted answers; returns console output."""
    output = io.StringIO()
    console = Console(file=output, width=120, color_system=None)
    stream = io.StringIO("".join(f"{a}\n" for a in answers))
    InteractiveSession(store, console=console, stream=stream).run()
    return output.getvalue()


@pytest.mark.integration
class TestParser:
    """Tests for argument parsing."""

    def test_serve_aliases(self) -> None:
        for alias in ("serve", "start", "server"):
            args = build_parser().parse_args([alias, "--port", "8080"])
            assert args.port == 8080

    def test_list_filter(self) -> None:
        args = build_parser().parse_args(["--strict", "list", "people", "--filter", "age>1"])

        assert args.strict is True
        assert args.table == "people"
        assert args.filter == "age>1"


@pytest.mark.integration
class TestOneShotCommands:
    """Tests for scripting commands."""

    def test_create_insert_list(self, capsys: pytest.CaptureFixture[str], temp_dir: Path) -> None:
        code, out, _ = run_cli(capsys, temp_dir, "create-table", "people", "name:string,age:number")
        assert code == 0
        assert json.loads(out)["columns"][1] == {"name": "age", "type": "number"}

        code, out, _ = run_cli(capsys, temp_dir, "insert", "people", '{"name": "Ali", "age": 25}')
        assert code == 0
        record = json.loads(out)
        assert record["name"] == "Ali"

        code, out, _ = run_cli(capsys, temp_dir, "list", "people", "--filter", "age<30")
        assert code == 0
        assert json.loads(out) == [record]

        assert (temp_dir / "people.json").is_file()

    def test_get_update_delete(self, capsys: pytest.CaptureFixture[str], temp_dir: Path) -> None:
        run_cli(capsys, temp_dir, "create-table", "people", "name:string,age:number")
        _, out, _ = run_cli(capsys, temp_dir, "insert", "people", '{"name": "Ali"}')
        record_id = json.loads(out)["id"]

        code, out, _ = run_cli(capsys, temp_dir, "update", "people", record_id, '{"age": 26}')
        assert code == 0
        assert json.loads(out) == {"name": "Ali", "id": record_id, "age": 26}

        code, out, _ = run_cli(capsys, temp_dir, "get", "people", record_id)
        assert json.loads(out)["age"] == 26

        code, _, _ = run_cli(capsys, temp_dir, "delete", "people", record_id)
        assert code == 0

        code, _, err = run_cli(capsys, temp_dir, "get", "people", record_id)
        assert code == 1
        assert "Record not found" in err

    def test_tables_and_drop(self, capsys: pytest.CaptureFixture[str], temp_dir: Path) -> None:
        run_cli(capsys, temp_dir, "create-table", "b", "x:string")
        run_cli(capsys, temp_dir, "create-table", "a", "x:string")

        _, out, _ = run_cli(capsys, temp_dir, "tables")
        assert json.loads(out) == ["a", "b"]

        code, _, _ = run_cli(capsys, temp_dir, "drop-table", "a")
        assert code == 0
        _, out, _ = run_cli(capsys, temp_dir, "tables")
        assert json.loads(out) == ["b"]

    def test_errors_exit_nonzero(self, capsys: pytest.CaptureFixture[str], temp_dir: Path) -> None:
        code, _, err = run_cli(capsys, temp_dir, "drop-table", "ghost")
        assert code == 1
        assert "Table not found" in err

        code, _, err = run_cli(capsys, temp_dir, "create-table", "people", "broken")
        assert code == 1

        run_cli(capsys, temp_dir, "create-table", "people", "name:string")
        code, _, _ = run_cli(capsys, temp_dir, "insert", "people", "[1, 2]")
        assert code == 1
        code, _, _ = run_cli(capsys, temp_dir, "insert", "people", "{not json")
        assert code == 1

    def test_strict_filter(self, capsys: pytest.CaptureFixture[str], temp_dir: Path) -> None:
        run_cli(capsys, temp_dir, "create-table", "people", "name:string")

        code, out, _ = run_cli(capsys, temp_dir, "list", "people", "--filter", "garbage")
        assert code == 0
        assert json.loads(out) == []

        code = main(["--data-dir", str(temp_dir), "--strict", "list", "people", "--filter", "garbage"])
        assert code == 1


@pytest.mark.integration
class TestInteractiveSession:
    """Tests for the menu-driven session."""

    def test_exit(self, store: TableStore) -> None:
        output = run_session(store, "0")

        assert "Create Table" in output
        assert "Exiting..." in output

    def test_create_and_insert_with_coercion(self, store: TableStore) -> None:
        run_session(
            store,
            "1", "people", "name:string,age:number,active:boolean,tags:array",
            "3", "people", "Ali", "25", "TRUE", "a, b",
            "0",
        )

        [record] = store.list_all("people")
        assert record["name"] == "Ali"
        assert record["age"] == 25
        assert record["active"] is True
        assert record["tags"] == ["a", "b"]

    def test_update_skips_blank_answers(self, store: TableStore) -> None:
        store.create_table("people", "name:string,age:number")
        record = store.insert_record("people", {"name": "Ali", "age": 25})

        run_session(store, "5", "people", record["id"], "", "26", "0")

        assert store.get_record("people", record["id"]) == {**record, "age": 26}

    def test_list_with_filter(self, store: TableStore) -> None:
        store.create_table("people", "name:string,age:number")
        store.insert_record("people", {"name": "Yunus", "age": 30})
        store.insert_record("people", {"name": "Ali", "age": 25})

        output = run_session(store, "6", "people", "y", "age>26", "0")

        assert "Yunus" in output
        assert '"Ali"' not in output

    def test_list_without_filter(self, store: TableStore) -> None:
        store.create_table("people", "name:string")
        store.insert_record("people", {"name": "Ali"})

        output = run_session(store, "6", "people", "n", "0")

        assert "Table Structure:" in output
        assert "Ali" in output

    def test_delete_record_and_table(self, store: TableStore) -> None:
        store.create_table("people", "name:string")
        record = store.insert_record("people", {"name": "Ali"})

        run_session(store, "4", "people", record["id"], "0")
        assert store.list_all("people") == []

        run_session(store, "2", "people", "0")
        assert store.list_tables() == []

    def test_errors_do_not_end_session(self, store: TableStore) -> None:
        output = run_session(store, "2", "ghost", "3", "ghost", "7", "0")

        assert "Table not found" in output
        assert "Exiting..." in output

    def test_bad_date_reported(self, store: TableStore) -> None:
        store.create_table("events", "when:date")

        output = run_session(store, "3", "events", "someday", "0")

        assert "Cannot convert" in output
        assert store.list_all("events") == []
