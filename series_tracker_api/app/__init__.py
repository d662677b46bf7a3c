"""
Application package initializer.

The API is organised into layers: ``schemas`` (payload models),
``repositories`` (storage backends behind an abstract contract),
``services`` (business rules) and ``api`` (HTTP routes and error
mapping).  ``core`` holds configuration, logging and database helpers.
"""

from .main import app, create_app  # noqa: F401
