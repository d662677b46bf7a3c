"""
Cross-cutting infrastructure: configuration, logging, database access
and the error taxonomy.
"""
