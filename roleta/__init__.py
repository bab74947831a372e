"""Roleta: distribuição de leads para corretores de plantão."""

__version__ = "0.1.0"
