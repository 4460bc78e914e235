"""Croco -- interactive full-stack monorepo generator."""

__version__ = "0.1.0"
