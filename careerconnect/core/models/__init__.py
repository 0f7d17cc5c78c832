"""
Domain and I/O models.

- domain: enums shared by entities, services and API schemas.
- io: Pydantic request/response schemas for the API.
"""
