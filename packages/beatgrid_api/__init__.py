"""Beatgrid HTTP API."""
