"""Pydantic schemas for API input/output."""
