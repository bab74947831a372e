"""Regras de domínio puras (sem banco)."""
from .shift_window import ShiftWindow, parse_time

__all__ = ["ShiftWindow", "parse_time"]
