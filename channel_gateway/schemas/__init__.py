"""Pydantic Schemas — request validation and response envelopes for API endpoints."""
