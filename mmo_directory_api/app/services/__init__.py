"""
Service layer abstraction.

Each service encapsulates business logic for the directory.  The
member service works against an injected record store, so the flat
JSON file used today can be swapped for a database without changing
API handlers.
"""
