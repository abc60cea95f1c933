"""Service layer: storage, ingestion, scheduling, live fan-out, analytics and sentiment.

Import services from their modules.
"""
