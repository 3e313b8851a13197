"""Pipeline execution infrastructure.

This package provides the batch runner for the classification pipeline:
- run_pipeline(): Validate inputs, resolve labels, classify, assemble layers
"""

from airzones.runner.runner import run_pipeline, validate_inputs

__all__ = [
    "run_pipeline",
    "validate_inputs",
]
