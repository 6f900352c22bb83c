"""Validation of automaton configurations.

:class:`FSMValidator` rejects structurally or semantically invalid
configurations before any input is processed. All checks are pure functions
of their arguments and run eagerly:

1. ``states`` is not empty
2. ``alphabet`` is not empty
3. ``initial_state`` is a member of ``states``
4. ``final_states`` is not empty
5. every final state is a member of ``states``
6. an ``output_mapper`` is configured
7. the output mapper yields a value for every state
8. every ``(state, symbol)`` pair transitions into ``states``

The first failing check determines the single error that is reported.
"""

import logging
from typing import AbstractSet, Any

from dataknobs_automata.core.config import FSMConfig
from dataknobs_automata.core.exceptions import (
    EmptyAlphabetError,
    EmptyFinalStatesError,
    EmptyStatesError,
    InvalidFinalStateError,
    InvalidInitialStateError,
    InvalidStateError,
    InvalidSymbolError,
    InvalidTransitionResultError,
    MissingOutputMapperError,
    OutputMapperNullError,
    OutputMapperUndefinedError,
)

logger = logging.getLogger(__name__)


class FSMValidator:
    """Validator for finite state machine configurations."""

    @staticmethod
    def validate_config(config: FSMConfig) -> None:
        """Validate an FSM configuration.

        Args:
            config: Configuration to validate.

        Raises:
            InvalidConfigurationError: The subclass matching the first
                violated invariant.
        """
        if not config.states:
            raise EmptyStatesError()

        if not config.alphabet:
            raise EmptyAlphabetError()

        if not FSMValidator._contains(config.states, config.initial_state):
            raise InvalidInitialStateError(config.initial_state, config.states)

        if not config.final_states:
            raise EmptyFinalStatesError()

        for final_state in config.final_states:
            if final_state not in config.states:
                raise InvalidFinalStateError(final_state, config.states)

        FSMValidator.validate_output_mapper(config)
        FSMValidator.validate_transitions(config)

        logger.debug(
            f"Configuration valid: {len(config.states)} states, "
            f"{len(config.alphabet)} symbols, {len(config.final_states)} final states"
        )

    @staticmethod
    def validate_output_mapper(config: FSMConfig) -> None:
        """Check that the output mapper is defined for every state.

        A mapper raising ``LookupError`` has no definition for the state; a
        mapper returning ``None`` yields a missing value.
        """
        if config.output_mapper is None:
            raise MissingOutputMapperError()

        for state in config.states:
            try:
                output = config.output_mapper(state)
            except LookupError as e:
                raise OutputMapperUndefinedError(state) from e
            if output is None:
                raise OutputMapperNullError(state)

    @staticmethod
    def validate_transitions(config: FSMConfig) -> None:
        """Check exhaustively that the transition function is closed over the states."""
        for state in config.states:
            for symbol in config.alphabet:
                try:
                    result = config.transition(state, symbol)
                except LookupError as e:
                    raise InvalidTransitionResultError(
                        state, symbol, reason=f"no transition defined ({e!r})"
                    ) from e
                if not FSMValidator._contains(config.states, result):
                    raise InvalidTransitionResultError(state, symbol, result)

    @staticmethod
    def validate_symbol(symbol: Any, alphabet: AbstractSet[Any], position: int | None = None) -> None:
        """Validate that an input symbol is in the alphabet.

        Raises:
            InvalidSymbolError: If the symbol is not in the alphabet.
        """
        if not FSMValidator._contains(alphabet, symbol):
            raise InvalidSymbolError(symbol, position)

    @staticmethod
    def validate_state(state: Any, states: AbstractSet[Any]) -> None:
        """Validate that a state is in the set of states.

        Raises:
            InvalidStateError: If the state is not in the set of states.
        """
        if not FSMValidator._contains(states, state):
            raise InvalidStateError(state)

    @staticmethod
    def _contains(values: AbstractSet[Any], item: Any) -> bool:
        # Unhashable input (e.g. a list smuggled into a symbol stream) is never a member
        try:
            return item in values
        except TypeError:
            return False
