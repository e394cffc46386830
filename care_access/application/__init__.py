"""Application layer: interfaces, DTOs, services.

Depends on domain and protocol definitions, plus the shared cache key format
(care_access.infrastructure.cache.keys). Infrastructure implements the
interfaces (permission store, roles, cache).
"""
