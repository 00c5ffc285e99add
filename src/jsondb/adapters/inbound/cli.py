"""Command-line adapter for the document store.

Commands:
    jsondb [--data-dir DIR] [--strict] interactive     - Menu-driven session (default)
    jsondb serve [--host H] [--port P]                  - Run the REST API
    jsondb tables                                       - List tables
    jsondb create-table NAME "name:string,age:number"   - Create a table
    jsondb drop-table NAME                              - Delete a table
    jsondb insert NAME '{"name": "Ali"}'                - Insert a record
    jsondb get NAME ID                                  - Show a record
    jsondb update NAME ID '{"age": 31}'                 - Merge fields into a record
    jsondb delete NAME ID                               - Delete a record
    jsondb list NAME [--filter "age>25,name:contains:ali"]

One-shot commands print JSON on stdout and errors on stderr. The
interactive session asks for each column's value and converts the answer
to the column's declared type before storing it.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, TextIO

from rich.console import Console
from rich.prompt import Confirm, Prompt

from jsondb.application import TableStore
from jsondb.domain.services import CoercionError, coerce_value
from jsondb.infrastructure.config import Config
from jsondb.infrastructure.container import Container
from jsondb.ports.inbound.table_store import TableStoreError

MENU = [
    ("1", "Create Table"),
    ("2", "Delete Table"),
    ("3", "Insert Record"),
    ("4", "Delete Record"),
    ("5", "Update Record"),
    ("6", "List Records"),
    ("7", "List Tables"),
    ("0", "Exit"),
]


class InteractiveSession:
    """Prompt-driven front-end over a TableStore.

    Args:
        store: The table store to operate on.
        console: Console for prompts and output.
        stream: Optional input stream; defaults to the console's stdin.
    """

    def __init__(
        self,
        store: TableStore,
        console: Console | None = None,
        stream: TextIO | None = None,
    ) -> None:
        self._store = store
        self._console = console or Console()
        self._stream = stream
        self._actions = {
            "1": self.create_table,
            "2": self.delete_table,
            "3": self.insert_record,
            "4": self.delete_record,
            "5": self.update_record,
            "6": self.list_records,
            "7": self.list_tables,
        }

    def run(self) -> None:
        """Show the menu until the user picks Exit."""
        while True:
            self._console.print()
            for key, label in MENU:
                self._console.print(f"  [bold]{key}[/bold]  {label}")
            choice = self._ask("Select an operation", choices=[key for key, _ in MENU])
            if choice == "0":
                self._console.print("Exiting...")
                return

            try:
                self._actions[choice]()
            except (TableStoreError, CoercionError) as e:
                self._console.print(f"[red]{e}[/red]")

    def create_table(self) -> None:
        name = self._ask("Enter table name")
        spec = self._ask('Enter column names and data types (e.g., "name:string,age:number")')
        self._store.create_table(name, spec)
        self._console.print(f"[green]{name} table created.[/green]")

    def delete_table(self) -> None:
        name = self._ask("Table name to delete")
        self._store.delete_table(name)
        self._console.print(f"[green]{name} table deleted.[/green]")

    def insert_record(self) -> None:
        name = self._ask("Table name to add data to")
        columns = self._store.get_columns(name)
        if columns is None:
            self._console.print("[red]Table not found.[/red]")
            return

        record: dict[str, Any] = {}
        for column in columns:
            raw = self._ask(f"Enter value for {column.name} ({column.type})", default="")
            record[column.name] = coerce_value(raw, column.type)

        stored = self._store.insert_record(name, record)
        self._console.print(f"[green]Record added with id {stored['id']}.[/green]")

    def delete_record(self) -> None:
        name = self._ask("Table name to delete record from")
        record_id = self._ask("Record ID to delete")
        self._store.delete_record(name, record_id)
        self._console.print("[green]Record deleted.[/green]")

    def update_record(self) -> None:
        name = self._ask("Table name to update record in")
        record_id = self._ask("Record ID to update")
        columns = self._store.get_columns(name)
        if columns is None:
            self._console.print("[red]Table not found.[/red]")
            return

        patch: dict[str, Any] = {}
        for column in columns:
            raw = self._ask(
                f"Enter new value for {column.name} ({column.type}) (leave empty to skip)",
                default="",
            )
            if raw != "":
                patch[column.name] = coerce_value(raw, column.type)

        self._store.update_record(name, record_id, patch)
        self._console.print("[green]Record updated.[/green]")

    def list_records(self) -> None:
        name = self._ask("Table name to list records")
        expression = None
        if Confirm.ask(
            "Do you want to apply filters?",
            default=False,
            console=self._console,
            stream=self._stream,
        ):
            expression = self._ask(
                'Enter filters (e.g., "name==yunus,age>25,email:contains:gmail")', default=""
            )

        table = self._store.get_table(name)
        records = self._store.query(name, expression)
        self._console.print("Table Structure:")
        self._console.print_json(data=[c.to_dict() for c in table.columns])
        self._console.print("Records:")
        self._console.print_json(data=records)

    def list_tables(self) -> None:
        self._console.print_json(data=self._store.list_tables())

    def _ask(self, prompt: str, choices: list[str] | None = None, default: str | None = None) -> str:
        if default is None:
            return Prompt.ask(prompt, console=self._console, choices=choices, stream=self._stream)
        return Prompt.ask(
            prompt,
            console=self._console,
            choices=choices,
            default=default,
            show_default=False,
            stream=self._stream,
        )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="jsondb",
        description="Schema-typed JSON document store",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory holding the table files (default: JSONDB_STORAGE__DATA_DIR or ./data)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject malformed filters and unknown operators instead of ignoring them",
    )

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("interactive", aliases=["cli"], help="Run the interactive session")

    serve = sub.add_parser("serve", aliases=["start", "server"], help="Run the REST API server")
    serve.add_argument("--host", default=None, help="Host to bind to")
    serve.add_argument("--port", type=int, default=None, help="Port to bind to")

    sub.add_parser("tables", help="List tables")

    create = sub.add_parser("create-table", help="Create a table")
    create.add_argument("table")
    create.add_argument("columns", help='Column spec, e.g. "name:string,age:number"')

    drop = sub.add_parser("drop-table", help="Delete a table")
    drop.add_argument("table")

    insert = sub.add_parser("insert", help="Insert a record")
    insert.add_argument("table")
    insert.add_argument("fields", help="JSON object of field values")

    get = sub.add_parser("get", help="Show a record")
    get.add_argument("table")
    get.add_argument("id")

    update = sub.add_parser("update", help="Merge fields into a record")
    update.add_argument("table")
    update.add_argument("id")
    update.add_argument("fields", help="JSON object of field values")

    delete = sub.add_parser("delete", help="Delete a record")
    delete.add_argument("table")
    delete.add_argument("id")

    list_ = sub.add_parser("list", help="List records")
    list_.add_argument("table")
    list_.add_argument("--filter", default=None, help='e.g. "age>25,name:contains:ali"')

    return parser


def _load_object(raw: str) -> dict[str, Any]:
    value = json.loads(raw)
    if not isinstance(value, dict):
        raise ValueError("expected a JSON object")
    return value


def run_command(args: argparse.Namespace, store: TableStore) -> Any:
    """Execute a one-shot command and return the JSON-serializable result."""
    command = args.command
    if command == "tables":
        return store.list_tables()
    elif command == "create-table":
        columns = store.create_table(args.table, args.columns)
        return {"tableName": args.table, "columns": [c.to_dict() for c in columns]}
    elif command == "drop-table":
        store.delete_table(args.table)
        return {"message": f"{args.table} table deleted"}
    elif command == "insert":
        return store.insert_record(args.table, _load_object(args.fields))
    elif command == "get":
        return store.get_record(args.table, args.id)
    elif command == "update":
        return store.update_record(args.table, args.id, _load_object(args.fields))
    elif command == "delete":
        store.delete_record(args.table, args.id)
        return {"message": "Record deleted"}
    elif command == "list":
        return store.query(args.table, args.filter)
    raise ValueError(f"Unknown command: {command}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    config = Config()
    if args.data_dir is not None:
        config.storage.data_dir = args.data_dir
    if args.strict:
        config.query.permissive = False

    container = Container.create(config)
    store = container.store
    out = Console()
    err = Console(stderr=True)

    command = args.command or "interactive"
    if command in ("interactive", "cli"):
        InteractiveSession(store, out).run()
        return 0

    if command in ("serve", "start", "server"):
        from jsondb.adapters.inbound.rest_api import run_server

        run_server(
            store,
            host=args.host or config.server.host,
            port=args.port or config.server.port,
        )
        return 0

    try:
        result = run_command(args, store)
    except (TableStoreError, ValueError) as e:
        err.print(f"Error: {e}", style="red", highlight=False)
        return 1

    out.print_json(data=result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
