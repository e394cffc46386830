"""Multi-tenant RBAC resolver and query scoping for the resident-care platform."""
