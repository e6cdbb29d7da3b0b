"""Infrastructure layer - Adapters and external integrations.

This layer contains implementations of domain protocols (ports):
- audit/: Policy audit stores (SQLAlchemy, in-memory)
- persistence/: Database engine, sessions and models
- logging/: Structured logging adapters

The infrastructure layer depends on the domain layer (implements protocols)
but the domain layer does NOT depend on infrastructure.
"""
