"""Pre-configured automata for common worked examples.

This package provides ready-to-use automaton patterns:

- **mod_three**: Remainder of a binary number modulo 3
- **toggle**: Two-state light switch

Each pattern provides factory functions that create configured
FiniteStateMachine instances, plus an equivalent declarative definition
usable with the config loader and the CLI.
"""
