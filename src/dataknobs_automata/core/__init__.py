"""Core automaton components."""

from dataknobs_automata.core.config import (
    FSMConfig,
    OutputMapper,
    TransitionFunction,
)
from dataknobs_automata.core.fsm import FiniteStateMachine, RunResult
from dataknobs_automata.core.validator import FSMValidator

__all__ = [
    # Configuration
    "FSMConfig",
    "TransitionFunction",
    "OutputMapper",
    # Validation
    "FSMValidator",
    # Engine
    "FiniteStateMachine",
    "RunResult",
]
