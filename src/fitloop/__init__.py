"""fitloop: adaptive training meta-prompt generator."""

__version__ = "0.1.0"
