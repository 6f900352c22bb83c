"""Automaton configuration.

An :class:`FSMConfig` is the declarative description of a deterministic
finite automaton (the classic 5-tuple ``(Q, Σ, q0, F, δ)``) with an optional
output mapper that translates a terminal state into a caller meaningful
value.

The configuration is immutable once created. The state, alphabet and final
state collections are frozen on construction, and the ``transition`` and
``output_mapper`` callables are expected to be pure and total over their
domains. Only the behavior observed while validating is checked; an impure
callable can still misbehave later, which is why the engine re-checks every
transition result at run time.
"""

from dataclasses import dataclass
from typing import Callable, Generic, Hashable, TypeVar

StateT = TypeVar("StateT", bound=Hashable)
SymbolT = TypeVar("SymbolT", bound=Hashable)
OutputT = TypeVar("OutputT")

TransitionFunction = Callable[[StateT, SymbolT], StateT]
"""Maps a state and an input symbol to the next state."""

OutputMapper = Callable[[StateT], OutputT]
"""Maps a terminal state to an output value."""


@dataclass(frozen=True)
class FSMConfig(Generic[StateT, SymbolT, OutputT]):
    """Configuration for a deterministic finite state machine.

    Attributes:
        states: Q, the set of states.
        alphabet: Σ, the input alphabet.
        initial_state: q0, the state every run starts in.
        final_states: F, the accepting states.
        transition: δ, the transition function.
        output_mapper: Optional mapping from terminal state to output.
    """

    states: frozenset[StateT]
    alphabet: frozenset[SymbolT]
    initial_state: StateT
    final_states: frozenset[StateT]
    transition: TransitionFunction
    output_mapper: OutputMapper | None = None

    def __post_init__(self) -> None:
        # Accept any iterable, store immutable sets
        object.__setattr__(self, "states", frozenset(self.states))
        object.__setattr__(self, "alphabet", frozenset(self.alphabet))
        object.__setattr__(self, "final_states", frozenset(self.final_states))
