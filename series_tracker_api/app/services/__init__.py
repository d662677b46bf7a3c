"""
Service layer abstraction.

Services encapsulate business logic and talk to storage only through
the repository they are constructed with, so API handlers never touch
the database directly.
"""
