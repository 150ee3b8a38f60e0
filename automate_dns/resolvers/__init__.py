"""Resolver domain: validation, storage and orchestration."""
