"""Shared utilities and telemetry. Used by every layer; no business logic."""
