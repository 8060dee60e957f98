"""Domain layer — customer aggregate, country table, validation rules.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, transport, or commands.
"""
