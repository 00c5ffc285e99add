"""Allow ``python -m jsondb``."""

from jsondb.adapters.inbound.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
