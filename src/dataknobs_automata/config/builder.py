"""Build executable automata from declarative definitions.

:class:`FSMBuilder` turns an :class:`AutomatonConfig` into an
:class:`FSMConfig` (resolving transition and output tables or function
references into callables) and then into a validated
:class:`FiniteStateMachine`.
"""

import functools
import importlib
import logging
from typing import Any, Callable, Dict, Mapping

from dataknobs_automata.config.schema import AutomatonConfig, FunctionReference
from dataknobs_automata.core.config import FSMConfig
from dataknobs_automata.core.fsm import FiniteStateMachine

logger = logging.getLogger(__name__)


class TransitionTable:
    """Transition function backed by a ``state -> symbol -> state`` table.

    Looking up a missing pair raises ``KeyError``.
    """

    def __init__(self, table: Mapping[Any, Mapping[Any, Any]]):
        self._table = {state: dict(row) for state, row in table.items()}

    def __call__(self, state: Any, symbol: Any) -> Any:
        return self._table[state][symbol]

    def __repr__(self) -> str:
        return f"TransitionTable({self._table!r})"


class OutputTable:
    """Output mapper backed by a ``state -> output`` table.

    Looking up a missing state raises ``KeyError``.
    """

    def __init__(self, outputs: Mapping[Any, Any]):
        self._outputs = dict(outputs)

    def __call__(self, state: Any) -> Any:
        return self._outputs[state]

    def __repr__(self) -> str:
        return f"OutputTable({self._outputs!r})"


class FSMBuilder:
    """Build FiniteStateMachine instances from automaton definitions."""

    def __init__(self):
        self._functions: Dict[str, Callable] = {}

    def register_function(self, name: str, func: Callable) -> None:
        """Register a callable for ``registered`` function references.

        Args:
            name: Name used by function references.
            func: Transition function or output mapper.
        """
        self._functions[name] = func

    def build(self, config: AutomatonConfig) -> FiniteStateMachine:
        """Build a validated machine from a definition.

        Raises:
            InvalidConfigurationError: If the definition violates an automaton invariant.
            ValueError: If a function reference cannot be resolved.
        """
        fsm = FiniteStateMachine(self.build_config(config))
        logger.debug(f"Built automaton '{config.name}'")
        return fsm

    def build_config(self, config: AutomatonConfig) -> FSMConfig:
        """Resolve a definition into a runtime FSMConfig without validating it."""
        if config.transition_function is not None:
            transition = self._resolve_function(config.transition_function)
        else:
            transition = TransitionTable(config.transitions or {})

        output_mapper: Callable | None = None
        if config.output_function is not None:
            output_mapper = self._resolve_function(config.output_function)
        elif config.outputs is not None:
            output_mapper = OutputTable(config.outputs)

        return FSMConfig(
            states=config.states,
            alphabet=config.alphabet,
            initial_state=config.initial_state,
            final_states=config.effective_final_states,
            transition=transition,
            output_mapper=output_mapper,
        )

    def _resolve_function(self, func_ref: FunctionReference) -> Callable:
        """Resolve a function reference to a callable.

        Raises:
            ValueError: If function cannot be resolved.
        """
        if func_ref.type == "registered":
            func = self._functions.get(func_ref.name)
            if func is None:
                raise ValueError(f"Registered function not found: {func_ref.name}")

        else:
            try:
                module = importlib.import_module(func_ref.module)
                func = getattr(module, func_ref.name)
            except (ImportError, AttributeError) as e:
                raise ValueError(
                    f"Custom function not found: {func_ref.module}.{func_ref.name}"
                ) from e
            self._functions.setdefault(func_ref.name, func)

        if not callable(func):
            raise ValueError(f"Function reference is not callable: {func_ref.name}")

        if func_ref.params:
            func = functools.partial(func, **func_ref.params)

        return func
