"""Observation tables: loading, validation and derived columns."""

from __future__ import annotations
