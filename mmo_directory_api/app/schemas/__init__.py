"""
Pydantic schema definitions for API payloads.

Schemas are separated from the stored JSON records to decouple the
API representation from persistence.
"""
