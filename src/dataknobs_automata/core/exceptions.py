"""Automaton Exceptions Module.

This module defines the exception hierarchy used throughout the automata
package. Every error carries a human-readable message plus an optional
context dictionary with the offending values, following the dataknobs
exception convention.

The hierarchy splits into two families:

- **Construction-time** errors (``InvalidConfigurationError`` subclasses),
  raised by :class:`~dataknobs_automata.core.validator.FSMValidator` while a
  :class:`~dataknobs_automata.core.fsm.FiniteStateMachine` is being built.
- **Execution-time** errors (``ExecutionError`` subclasses), raised while an
  input sequence is being processed.

Example:
    ```python
    from dataknobs_automata.core.exceptions import AutomatonError

    try:
        fsm.process(["0", "2"])
    except AutomatonError as e:
        logger.error(f"Error: {e}")
        if e.context:
            logger.error(f"Context: {e.context}")
    ```
"""

from typing import Any, Dict, Iterable


class AutomatonError(Exception):
    """Base exception for the automata package.

    Attributes:
        context: Dictionary containing contextual information about the error
        details: Alias for context

    Args:
        message: Human-readable error message
        context: Optional dictionary with error context
        details: Alternative to context (both are supported)
    """

    def __init__(
        self,
        message: str,
        context: Dict[str, Any] | None = None,
        details: Dict[str, Any] | None = None,
    ):
        super().__init__(message)
        # Details takes precedence if both are provided
        self.context = details or context or {}
        self.details = self.context


class ConfigurationError(AutomatonError):
    """Raised when configuration is invalid or missing."""
    pass


class ValidationError(AutomatonError):
    """Raised when caller supplied data fails validation."""
    pass


class OperationError(AutomatonError):
    """Raised when an operation fails."""
    pass


def _describe(values: Iterable[Any]) -> str:
    return ", ".join(sorted(repr(v) for v in values))


# ---------------------------------------------------------------------------
# Construction-time errors
# ---------------------------------------------------------------------------


class InvalidConfigurationError(ConfigurationError):
    """Raised when an automaton configuration violates an invariant."""
    pass


class EmptyStatesError(InvalidConfigurationError):
    """Raised when the set of states is empty."""

    def __init__(self):
        super().__init__("The set of states must not be empty")


class EmptyAlphabetError(InvalidConfigurationError):
    """Raised when the input alphabet is empty."""

    def __init__(self):
        super().__init__("The input alphabet must not be empty")


class InvalidInitialStateError(InvalidConfigurationError):
    """Raised when the initial state is not a member of the states."""

    def __init__(self, state: Any, states: Iterable[Any]):
        states = frozenset(states)
        super().__init__(
            f"Initial state must be included in the set of states: {state!r}",
            context={"state": state, "states": _describe(states)},
        )
        self.state = state
        self.states = states


class EmptyFinalStatesError(InvalidConfigurationError):
    """Raised when no final (accepting) states are configured."""

    def __init__(self):
        super().__init__("The set of final states must not be empty")


class InvalidFinalStateError(InvalidConfigurationError):
    """Raised when a final state is not a member of the states."""

    def __init__(self, state: Any, states: Iterable[Any]):
        states = frozenset(states)
        super().__init__(
            f"All final states must be included in the set of states: {state!r}",
            context={"state": state, "states": _describe(states)},
        )
        self.state = state
        self.states = states


class MissingOutputMapperError(InvalidConfigurationError):
    """Raised when an output mapper is required but none is configured."""

    def __init__(self):
        super().__init__("An output mapper is required to produce output values")


class OutputMapperUndefinedError(InvalidConfigurationError):
    """Raised when the output mapper has no definition for a state."""

    def __init__(self, state: Any):
        super().__init__(
            f"Output mapper is undefined for state: {state!r}",
            context={"state": state},
        )
        self.state = state


class OutputMapperNullError(InvalidConfigurationError):
    """Raised when the output mapper returns None for a state."""

    def __init__(self, state: Any):
        super().__init__(
            f"Output mapper returned None for state: {state!r}",
            context={"state": state},
        )
        self.state = state


class InvalidTransitionResultError(InvalidConfigurationError):
    """Raised when a transition leads outside of the set of states."""

    def __init__(self, state: Any, symbol: Any, result: Any = None, reason: str | None = None):
        message = (
            f"Transition from state {state!r} on symbol {symbol!r} "
            f"must lead to a member of the set of states"
        )
        if reason:
            message = f"{message}: {reason}"
        else:
            message = f"{message}, got {result!r}"
        super().__init__(
            message,
            context={"state": state, "symbol": symbol, "result": result},
        )
        self.state = state
        self.symbol = symbol
        self.result = result


# ---------------------------------------------------------------------------
# Execution-time errors
# ---------------------------------------------------------------------------


class ExecutionError(OperationError):
    """Raised when processing an input sequence fails."""
    pass


class InvalidSymbolError(ExecutionError):
    """Raised when an input symbol is not part of the alphabet."""

    def __init__(self, symbol: Any, position: int | None = None):
        context: Dict[str, Any] = {"symbol": symbol}
        if position is not None:
            context["position"] = position
        super().__init__(f"Invalid input symbol: {symbol!r}", context=context)
        self.symbol = symbol
        self.position = position


class InvalidStateError(ExecutionError):
    """Raised when a transition produced a state outside of the states."""

    def __init__(self, state: Any):
        super().__init__(f"Invalid state: {state!r}", context={"state": state})
        self.state = state


class NonFinalTerminalStateError(ExecutionError):
    """Raised when processing ends in a state that is not final."""

    def __init__(self, state: Any):
        super().__init__(
            f"Processing ended in non-final state: {state!r}",
            context={"state": state},
        )
        self.state = state
