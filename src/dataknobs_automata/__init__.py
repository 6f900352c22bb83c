"""DataKnobs Automata.

A generic, configuration driven deterministic finite state machine engine
with declarative (JSON/YAML) definitions and ready-made patterns.
"""

__version__ = "0.1.0"

# Core components
from .core.config import FSMConfig
from .core.fsm import FiniteStateMachine, RunResult
from .core.validator import FSMValidator

# Configuration
from .config.builder import FSMBuilder
from .config.loader import ConfigLoader
from .config.schema import AutomatonConfig

# Patterns
from .patterns.mod_three import mod_three
from .patterns.toggle import create_toggle_fsm

__all__ = [
    "__version__",
    # Core
    "FSMConfig",
    "FSMValidator",
    "FiniteStateMachine",
    "RunResult",
    # Config
    "AutomatonConfig",
    "ConfigLoader",
    "FSMBuilder",
    # Patterns
    "mod_three",
    "create_toggle_fsm",
]
