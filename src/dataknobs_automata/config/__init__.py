"""Automaton configuration system for loading, validating, and building machines.

This package provides:
- **schema**: Pydantic schemas defining declarative automaton definitions
- **loader**: Load definitions from JSON/YAML files and dicts
- **builder**: Build executable machines from definitions
- **validator**: Validate definitions, collecting error messages

Definition files can be JSON or YAML and describe states, alphabet,
initial and final states, transitions and outputs.
"""
