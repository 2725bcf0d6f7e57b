"""
Beatgrid Core

Shared constants, models, exceptions and protocols for the step sequencer.
"""

__version__ = "0.1.0"
