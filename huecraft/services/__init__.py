"""Huecraft services: color generation, personalization and palette storage."""
