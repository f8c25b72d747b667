"""Infrastructure layer — database engine, schema, record store.

This layer depends on stdlib and third-party libs (SQLAlchemy).
The Ad/Bid models from the domain layer are the store's record type;
it must never import from services, commands, or output.
"""
