"""Interactive questionnaire client."""

from .client import ManualInputClient

__all__ = ["ManualInputClient"]
