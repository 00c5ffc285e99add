"""REST API adapter for the document store.

This module provides a FastAPI-based REST API mapping HTTP paths and
verbs one-to-one onto TableStore operations.

Endpoints:
    GET    /                               - Endpoint index
    GET    /health                         - Health check
    GET    /tables                         - List tables
    POST   /tables                         - Create table
    DELETE /tables/{table}                 - Delete table
    GET    /tables/{table}                 - Table structure and records
    GET    /tables/{table}/records         - List records (?filter=...)
    POST   /tables/{table}/records         - Insert record
    GET    /tables/{table}/records/{id}    - Get record
    PUT    /tables/{table}/records/{id}    - Update record
    DELETE /tables/{table}/records/{id}    - Delete record

Usage:
    from jsondb.adapters.inbound.rest_api import create_app
    from jsondb.application import TableStore

    app = create_app(TableStore.open("/path/to/data"))
    # Run with uvicorn: uvicorn app:app --host 0.0.0.0 --port 3000
"""

from __future__ import annotations

from typing import Any, NoReturn

from fastapi import Body, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from jsondb import __version__
from jsondb.application import TableStore
from jsondb.domain.services import format_column_spec, parse_filter
from jsondb.infrastructure.logging import get_logger
from jsondb.ports.inbound.table_store import (
    CorruptTableError,
    FilterSyntaxError,
    InvalidSchemaError,
    InvalidTableNameError,
    RecordNotFoundError,
    TableAlreadyExistsError,
    TableNotFoundError,
    TableStoreError,
)

logger = get_logger(__name__)


class ColumnModel(BaseModel):
    """A column declaration."""

    name: str = Field(..., description="Column name")
    type: str = Field(..., description="Column type: string, number, boolean, array, date, null")


class CreateTableRequest(BaseModel):
    """Request model for table creation."""

    tableName: str = Field(..., min_length=1, description="Table name")
    columns: list[ColumnModel] = Field(..., description="Ordered column declarations")


class MessageResponse(BaseModel):
    """Response model for mutations."""

    message: str = Field(..., description="Status message")


class RecordResponse(MessageResponse):
    """Response model for mutations that return the stored record."""

    record: dict[str, Any] = Field(default_factory=dict, description="The stored record")


class TableResponse(BaseModel):
    """Response model for table structure."""

    tableName: str = Field(..., description="Table name")
    columns: list[ColumnModel] = Field(default_factory=list, description="Column declarations")
    data: list[dict[str, Any]] = Field(default_factory=list, description="All records")


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")


_STATUS_BY_ERROR: list[tuple[type[TableStoreError], int]] = [
    (TableNotFoundError, 404),
    (RecordNotFoundError, 404),
    (TableAlreadyExistsError, 409),
    (InvalidSchemaError, 400),
    (InvalidTableNameError, 400),
    (FilterSyntaxError, 400),
    (CorruptTableError, 500),
]


def _raise_http(error: TableStoreError) -> NoReturn:
    """Translate a store error into an HTTPException."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            raise HTTPException(status_code=status_code, detail=str(error)) from error
    raise HTTPException(status_code=500, detail=str(error)) from error


def create_app(store: TableStore | None = None) -> FastAPI:
    """Create a FastAPI application for the document store.

    Args:
        store: The table store to serve. Defaults to the one built by the
            global container from environment configuration.

    Returns:
        A configured FastAPI application.
    """
    if store is None:
        from jsondb.infrastructure.container import get_container

        store = get_container().store

    app = FastAPI(
        title="JSON Database API",
        description="REST API for schema-typed JSON tables",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/", tags=["Health"])
    def index() -> dict[str, Any]:
        """Describe the available endpoints."""
        return {
            "message": "JSON Database API",
            "endpoints": {
                "GET /tables": "List all tables",
                "POST /tables": "Create new table",
                "DELETE /tables/{table}": "Delete table",
                "GET /tables/{table}": "Get table structure",
                "GET /tables/{table}/records": "Get all records from table",
                "GET /tables/{table}/records?filter={field}{operator}{value}": "Get filtered records from table",
                "POST /tables/{table}/records": "Add new record",
                "GET /tables/{table}/records/{id}": "Get specific record",
                "PUT /tables/{table}/records/{id}": "Update record",
                "DELETE /tables/{table}/records/{id}": "Delete record",
            },
        }

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(status="healthy", version=__version__)

    @app.get("/tables", response_model=list[str], tags=["Tables"])
    def list_tables() -> list[str]:
        """List all tables."""
        return store.list_tables()

    @app.post("/tables", response_model=TableResponse, status_code=201, tags=["Tables"])
    def create_table(request: CreateTableRequest) -> TableResponse:
        """Create a new, empty table."""
        spec = format_column_spec([c.model_dump() for c in request.columns])
        try:
            columns = store.create_table(request.tableName, spec)
        except TableStoreError as e:
            _raise_http(e)
        return TableResponse(
            tableName=request.tableName,
            columns=[ColumnModel(**c.to_dict()) for c in columns],
        )

    @app.delete("/tables/{table}", response_model=MessageResponse, tags=["Tables"])
    def delete_table(table: str) -> MessageResponse:
        """Delete a table and all its records."""
        try:
            store.delete_table(table)
        except TableStoreError as e:
            _raise_http(e)
        return MessageResponse(message=f"{table} table deleted")

    @app.get("/tables/{table}", response_model=TableResponse, tags=["Tables"])
    def get_table(table: str) -> TableResponse:
        """Get a table's columns and records."""
        try:
            result = store.get_table(table)
        except TableStoreError as e:
            _raise_http(e)
        return TableResponse(
            tableName=table,
            columns=[ColumnModel(**c.to_dict()) for c in result.columns],
            data=result.records,
        )

    @app.get("/tables/{table}/records", response_model=list[dict[str, Any]], tags=["Records"])
    def list_records(
        table: str,
        filter_expr: str | None = Query(
            None,
            alias="filter",
            description="Comma-separated field<op>value tokens, e.g. age>25,name:contains:ali",
        ),
    ) -> list[dict[str, Any]]:
        """List records, optionally filtered."""
        try:
            predicates = parse_filter(filter_expr, permissive=store.permissive)
            return store.list_records(table, predicates)
        except TableStoreError as e:
            _raise_http(e)

    @app.post(
        "/tables/{table}/records", response_model=RecordResponse, status_code=201, tags=["Records"]
    )
    def insert_record(table: str, fields: dict[str, Any] = Body(...)) -> RecordResponse:
        """Insert a record; the store assigns its id."""
        try:
            record = store.insert_record(table, fields)
        except TableStoreError as e:
            _raise_http(e)
        return RecordResponse(message="Record added", record=record)

    @app.get("/tables/{table}/records/{record_id}", response_model=dict[str, Any], tags=["Records"])
    def get_record(table: str, record_id: str) -> dict[str, Any]:
        """Get a single record."""
        try:
            return store.get_record(table, record_id)
        except TableStoreError as e:
            _raise_http(e)

    @app.put("/tables/{table}/records/{record_id}", response_model=RecordResponse, tags=["Records"])
    def update_record(
        table: str, record_id: str, patch: dict[str, Any] = Body(...)
    ) -> RecordResponse:
        """Merge fields into a record. The record id never changes."""
        try:
            record = store.update_record(table, record_id, patch)
        except TableStoreError as e:
            _raise_http(e)
        return RecordResponse(message="Record updated", record=record)

    @app.delete(
        "/tables/{table}/records/{record_id}", response_model=MessageResponse, tags=["Records"]
    )
    def delete_record(table: str, record_id: str) -> MessageResponse:
        """Delete a single record."""
        try:
            store.delete_record(table, record_id)
        except TableStoreError as e:
            _raise_http(e)
        return MessageResponse(message="Record deleted")

    return app


def run_server(
    store: TableStore,
    host: str = "0.0.0.0",
    port: int = 3000,
) -> None:
    """Run the REST API server.

    Args:
        store: The table store to serve.
        host: Host to bind to.
        port: Port to bind to.
    """
    import uvicorn

    app = create_app(store)
    logger.info("rest_api_starting", host=host, port=port)
    uvicorn.run(app, host=host, port=port)
