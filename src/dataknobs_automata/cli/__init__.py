"""Automata CLI module.

Provides command-line interface for automaton operations.
"""

from .main import cli, main

__all__ = ['cli', 'main']
