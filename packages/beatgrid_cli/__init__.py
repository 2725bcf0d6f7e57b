"""Beatgrid command-line interface."""
