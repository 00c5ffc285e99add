"""Domain layer - data model and pure document-store logic."""
