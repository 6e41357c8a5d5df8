from __future__ import annotations


class WitnessModelError(ValueError):
    pass


class InvalidConfig(WitnessModelError):
    """Tree shape cannot describe a usable tree (depth < 1 or branching factor < 2)."""


class DivisionByZero(WitnessModelError, ZeroDivisionError):
    """Comparison against a candidate whose witness is empty."""
