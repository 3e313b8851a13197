"""Validation module for station and zone input datasets.

Validators return lists of ValidationError rather than raising, so every
problem in an input file is reported at once.
"""

from airzones.validation.errors import ValidationError
from airzones.validation.inputs import StationInputValidator, ZoneInputValidator

__all__ = ["ValidationError", "StationInputValidator", "ZoneInputValidator"]
