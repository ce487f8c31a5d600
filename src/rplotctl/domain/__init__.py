"""Domain layer — literals, value types, schemas, and commands.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
