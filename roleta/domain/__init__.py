"""Domínio da roleta: entidades, regras e exceções."""
