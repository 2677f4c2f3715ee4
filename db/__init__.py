"""
db/ - Database Layer
====================
Opens database connections (SQLite or PostgreSQL) and initializes the schema.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
