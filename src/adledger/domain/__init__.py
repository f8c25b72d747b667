"""Domain layer — ad/bid models, status rules, identifiers.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
