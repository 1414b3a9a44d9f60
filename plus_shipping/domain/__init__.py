"""
Domain layer for consignor management.

This layer contains business entities, value objects, and domain logic
following Domain-Driven Design principles.
"""
