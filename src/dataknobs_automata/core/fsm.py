"""Deterministic finite state machine engine.

:class:`FiniteStateMachine` owns a validated :class:`FSMConfig` and runs
input sequences through it, one symbol at a time, from left to right.

Execution Model:
    Every call starts from the configured initial state. For each symbol the
    engine:

    1. checks that the symbol belongs to the alphabet
    2. applies the transition function
    3. checks that the resulting state belongs to the set of states

    The current state lives only for the duration of a call, so a single
    engine may be shared between callers as long as the configured callables
    are pure. Failures abort the call immediately; no partial result is
    returned.

Example:
    ```python
    config = FSMConfig(
        states={"even", "odd"},
        alphabet={"1"},
        initial_state="even",
        final_states={"even"},
        transition=lambda state, _: "odd" if state == "even" else "even",
        output_mapper=lambda state: state,
    )
    fsm = FiniteStateMachine(config)
    fsm.accepts("11")   # True
    ```
"""

import logging
from dataclasses import dataclass
from typing import AbstractSet, Generic, Iterable, List, Tuple

from dataknobs_automata.core.config import FSMConfig, OutputT, StateT, SymbolT
from dataknobs_automata.core.exceptions import (
    MissingOutputMapperError,
    NonFinalTerminalStateError,
)
from dataknobs_automata.core.validator import FSMValidator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunResult(Generic[StateT]):
    """Outcome of running an input sequence."""
    final_state: StateT
    path: Tuple[StateT, ...]
    accepted: bool
    steps: int


class FiniteStateMachine(Generic[StateT, SymbolT, OutputT]):
    """Generic deterministic finite state machine."""

    def __init__(self, config: FSMConfig[StateT, SymbolT, OutputT]):
        """Initialize the machine.

        Args:
            config: Automaton configuration. It is validated exhaustively
                before the machine becomes usable.

        Raises:
            InvalidConfigurationError: If the configuration is invalid.
        """
        FSMValidator.validate_config(config)
        self._config = config
        logger.debug(f"Created FSM with initial state {config.initial_state!r}")

    @property
    def config(self) -> FSMConfig[StateT, SymbolT, OutputT]:
        return self._config

    @property
    def states(self) -> AbstractSet[StateT]:
        return self._config.states

    @property
    def alphabet(self) -> AbstractSet[SymbolT]:
        return self._config.alphabet

    @property
    def initial_state(self) -> StateT:
        return self._config.initial_state

    @property
    def final_states(self) -> AbstractSet[StateT]:
        return self._config.final_states

    @property
    def has_output_mapper(self) -> bool:
        return self._config.output_mapper is not None

    def process(self, input: Iterable[SymbolT]) -> StateT:
        """Process an input sequence and return the terminal state.

        Args:
            input: Input symbols, consumed in order. An empty sequence leaves
                the machine in its initial state.

        Returns:
            The state reached after consuming the whole sequence.

        Raises:
            InvalidSymbolError: If a symbol is not in the alphabet.
            InvalidStateError: If a transition leaves the set of states.
        """
        return self._execute(input, None)

    def process_with_output(self, input: Iterable[SymbolT]) -> OutputT:
        """Process an input sequence and map the terminal state to an output.

        Args:
            input: Input symbols, consumed in order.

        Returns:
            The output mapped from the terminal state.

        Raises:
            NonFinalTerminalStateError: If processing ends in a non-final state.
            MissingOutputMapperError: If no output mapper is configured.
        """
        return self.output_for(self.process(input))

    def output_for(self, state: StateT) -> OutputT:
        """Map a terminal state, e.g. ``RunResult.final_state``, to its output.

        Raises:
            NonFinalTerminalStateError: If the state is not final.
            MissingOutputMapperError: If no output mapper is configured.
        """
        if state not in self._config.final_states:
            raise NonFinalTerminalStateError(state)

        if self._config.output_mapper is None:
            raise MissingOutputMapperError()

        return self._config.output_mapper(state)

    def accepts(self, input: Iterable[SymbolT]) -> bool:
        """Check whether processing the input ends in a final state."""
        return self.process(input) in self._config.final_states

    def run(self, input: Iterable[SymbolT]) -> RunResult[StateT]:
        """Process an input sequence, recording every visited state.

        Returns:
            RunResult with the terminal state, the visited path (starting with
            the initial state), the acceptance flag and the number of steps.
        """
        path: List[StateT] = [self._config.initial_state]
        final_state = self._execute(input, path)
        return RunResult(
            final_state=final_state,
            path=tuple(path),
            accepted=final_state in self._config.final_states,
            steps=len(path) - 1,
        )

    def _execute(self, input: Iterable[SymbolT], path: List[StateT] | None) -> StateT:
        config = self._config
        current_state = config.initial_state

        for position, symbol in enumerate(input):
            FSMValidator.validate_symbol(symbol, config.alphabet, position)

            next_state = config.transition(current_state, symbol)
            FSMValidator.validate_state(next_state, config.states)

            logger.debug(f"{current_state!r} --{symbol!r}--> {next_state!r}")
            current_state = next_state
            if path is not None:
                path.append(current_state)

        return current_state

    def __repr__(self) -> str:
        return (
            f"FiniteStateMachine(states={len(self._config.states)}, "
            f"alphabet={len(self._config.alphabet)}, "
            f"initial_state={self._config.initial_state!r})"
        )
