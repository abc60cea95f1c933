"""Command-line entry points (one-shot ingestion, API probe)."""
