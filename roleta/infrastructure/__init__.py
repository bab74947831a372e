"""Infraestrutura: banco, logging, serviços e jobs."""
