"""Prompt text generation."""

from .template import render

__all__ = ["render"]
