"""
Top-level package for the Series Tracker API.

All functionality lives in submodules under ``app``.
"""

__all__ = []
