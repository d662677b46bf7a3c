"""
Pydantic schema definitions for API payloads.

Schemas are shared by the API, service and repository layers; the
repositories build ``SeriesRead`` instances directly from stored rows.
"""
