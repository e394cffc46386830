"""Infrastructure layer: SQL persistence and Redis cache adapters."""
