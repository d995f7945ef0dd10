"""
Pydantic schema definitions for API payloads.

Each domain (customers, books, purchases) defines its own request and
response models.  Schemas are separated from the domain dataclasses in
``models`` to decouple API representation from persistence.
"""
