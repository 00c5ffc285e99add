"""Inbound adapters for the document store.

Inbound adapters handle incoming requests and convert them to
TableStore operations.

Exports:
    REST API:
        - create_app: Create a FastAPI application
        - run_server: Run the REST API server
    CLI:
        - main: Command-line entry point
        - InteractiveSession: Prompt-driven front-end
"""

from jsondb.adapters.inbound.cli import InteractiveSession, main
from jsondb.adapters.inbound.rest_api import create_app, run_server

__all__ = [
    # REST API
    "create_app",
    "run_server",
    # CLI
    "InteractiveSession",
    "main",
]
