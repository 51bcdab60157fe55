"""Genetic evolution of thrust programs for simulated rockets."""

__version__ = "0.1.0"
