"""
HTTP layer of the Series Tracker API.

Routers, dependency providers and exception handlers live here; no
business rules do.
"""
