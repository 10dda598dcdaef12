"""
db/ - Database Layer
====================
Owns the PostgreSQL connection pool and the schema.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
