"""Utility helpers shared across the query builder app."""

from __future__ import annotations

from flask import current_app

from .query import EsQueryBuilder


def get_query_builder() -> EsQueryBuilder:
    """Return the query builder configured for the current app."""
    return current_app.extensions["query_builder"]
