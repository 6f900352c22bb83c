"""Automata CLI tool for validating and running automaton definitions.

This module provides a command-line interface for:
- Creating definitions from the bundled patterns
- Validating and displaying definition files
- Running input sequences through a definition
- Computing binary remainders modulo 3
"""

import json
import logging
import sys
from pathlib import Path
from typing import List, NoReturn

import click
import yaml
from pydantic import ValidationError as SchemaValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table
from rich.tree import Tree

from .. import __version__
from ..config.builder import FSMBuilder
from ..config.loader import ConfigLoader
from ..config.schema import generate_json_schema
from ..config.validator import ConfigValidator
from ..core.exceptions import AutomatonError
from ..core.fsm import FiniteStateMachine
from ..patterns.mod_three import MOD_THREE_DEFINITION, mod_three
from ..patterns.toggle import TOGGLE_DEFINITION

console = Console()
error_console = Console(stderr=True)

TEMPLATES = {
    'mod_three': MOD_THREE_DEFINITION,
    'toggle': TOGGLE_DEFINITION,
}

_HANDLED_ERRORS = (AutomatonError, SchemaValidationError, ValueError, TypeError, OSError)


def _fail(message: str) -> NoReturn:
    console.print(f"[red]{escape(message)}[/red]")
    sys.exit(1)


def _load_fsm(config_file: str) -> FiniteStateMachine:
    config = ConfigLoader().load_from_file(config_file)
    return FSMBuilder().build(config)


def _split_input(data: str, separator: str | None) -> List[str]:
    if separator is None:
        return list(data)
    return [token for token in data.split(separator) if token]


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def cli(verbose: bool):
    """Automata CLI - Deterministic Finite State Machine Tool"""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=error_console, show_path=False)],
        )


@cli.group()
def config():
    """Automaton definition management commands"""
    pass


@config.command()
@click.argument('template', type=click.Choice(sorted(TEMPLATES)))
@click.option('--output', '-o', default='automaton.yaml', help='Output file path')
@click.option('--format', '-f', type=click.Choice(['yaml', 'json']), default='yaml')
def create(template: str, output: str, format: str):
    """Create a new definition from a bundled pattern"""
    config_data = TEMPLATES[template]

    output_path = Path(output)
    with open(output_path, 'w') as f:
        if format == 'yaml':
            yaml.safe_dump(config_data, f, default_flow_style=False, sort_keys=False)
        else:
            json.dump(config_data, f, indent=2)

    console.print(f"[green]✓[/green] Created {template} definition in {output}")
    console.print(f"  States: {len(config_data['states'])}")
    console.print(f"  Alphabet: {len(config_data['alphabet'])}")


@config.command()
@click.argument('config_file', type=click.Path(exists=True))
@click.option('--verbose', '-v', is_flag=True, help='Show detailed validation output')
def validate(config_file: str, verbose: bool):
    """Validate an automaton definition file"""
    errors = ConfigValidator().validate_file(config_file)

    if errors:
        console.print("[red]✗[/red] Configuration validation failed!")
        console.print("\n[bold red]Errors:[/bold red]")
        for error in errors:
            console.print(f"  {error}", markup=False)
        sys.exit(1)

    console.print("[green]✓[/green] Configuration is valid!")

    if verbose:
        definition = ConfigLoader().load_from_file(config_file)
        console.print("\n[bold]Configuration Details:[/bold]")
        console.print(f"  Name: {escape(definition.name)}")
        console.print(f"  States: {len(set(definition.states))}")
        console.print(f"  Alphabet: {len(set(definition.alphabet))}")
        console.print(f"  Initial State: {escape(definition.initial_state)}")
        console.print(
            f"  Final States: {escape(', '.join(definition.effective_final_states))}"
        )


@config.command()
@click.argument('config_file', type=click.Path(exists=True))
@click.option('--format', '-f', type=click.Choice(['tree', 'table']), default='tree')
def show(config_file: str, format: str):
    """Display automaton definition structure"""
    try:
        definition = ConfigLoader().load_from_file(config_file)
    except _HANDLED_ERRORS as e:
        _fail(f"Error loading configuration: {e}")

    final_states = set(definition.effective_final_states)
    name = escape(definition.name)

    def state_label(state: str) -> str:
        label = escape(state)
        if state == definition.initial_state:
            label += " [green](initial)[/green]"
        if state in final_states:
            label += " [red](final)[/red]"
        return label

    if format == 'tree':
        tree = Tree(f"[bold]{name}[/bold]")

        states_branch = tree.add("States")
        for state in definition.states:
            states_branch.add(state_label(state))

        tree.add(f"Alphabet: {escape(', '.join(definition.alphabet))}")

        transitions_branch = tree.add("Transitions")
        if definition.transitions is not None:
            for state, row in definition.transitions.items():
                for symbol, target in row.items():
                    transitions_branch.add(escape(f"{state} --{symbol}--> {target}"))
        else:
            ref = definition.transition_function
            transitions_branch.add(escape(f"function: {ref.module or ref.type}.{ref.name}"))

        if definition.outputs is not None:
            outputs_branch = tree.add("Outputs")
            for state, output in definition.outputs.items():
                outputs_branch.add(escape(f"{state} => {output!r}"))

        console.print(tree)

    else:
        states_table = Table(title=f"{name} - States")
        states_table.add_column("Name", style="cyan")
        states_table.add_column("Type", style="green")
        states_table.add_column("Output", style="yellow")

        for state in definition.states:
            state_type = []
            if state == definition.initial_state:
                state_type.append("Initial")
            if state in final_states:
                state_type.append("Final")
            if not state_type:
                state_type.append("Normal")
            output = '-'
            if definition.outputs is not None and state in definition.outputs:
                output = repr(definition.outputs[state])
            states_table.add_row(escape(state), ' '.join(state_type), escape(output))

        console.print(states_table)

        if definition.transitions is not None:
            transitions_table = Table(title=f"{name} - Transitions")
            transitions_table.add_column("From", style="cyan")
            for symbol in definition.alphabet:
                transitions_table.add_column(escape(symbol), style="magenta")

            for state in definition.states:
                row = definition.transitions.get(state, {})
                transitions_table.add_row(
                    escape(state),
                    *[escape(row.get(symbol, '-')) for symbol in definition.alphabet],
                )

            console.print(transitions_table)


@config.command()
def schema():
    """Print the JSON schema of automaton definitions"""
    console.print(Syntax(json.dumps(generate_json_schema(), indent=2), "json"))


@cli.group()
def run():
    """Execute automaton definitions"""
    pass


@run.command()
@click.argument('config_file', type=click.Path(exists=True))
@click.argument('data')
@click.option('--separator', '-s', help='Split input into symbols on this separator')
@click.option('--output-value', '-o', is_flag=True, help='Print the mapped output value')
@click.option('--verbose', '-v', is_flag=True, help='Show execution path')
def process(config_file: str, data: str, separator: str | None,
            output_value: bool, verbose: bool):
    """Run an input sequence through an automaton"""
    symbols = _split_input(data, separator)

    try:
        fsm = _load_fsm(config_file)
        result = fsm.run(symbols)
        output = fsm.output_for(result.final_state) if output_value else None
    except _HANDLED_ERRORS as e:
        _fail(f"Execution error: {e}")

    console.print(f"  Final state: {escape(result.final_state)}")
    console.print(f"  Accepted: {result.accepted}")
    console.print(f"  Steps: {result.steps}")

    if output_value:
        console.print(f"  Output: {output!r}", markup=False)

    if verbose:
        console.print("\n[bold]Execution Path:[/bold]")
        for i, state in enumerate(result.path):
            console.print(f"  {i}. {escape(state)}")


@run.command()
@click.argument('config_file', type=click.Path(exists=True))
@click.argument('data')
@click.option('--separator', '-s', help='Split input into symbols on this separator')
def accepts(config_file: str, data: str, separator: str | None):
    """Check whether an automaton accepts an input sequence"""
    try:
        accepted = _load_fsm(config_file).accepts(_split_input(data, separator))
    except _HANDLED_ERRORS as e:
        _fail(f"Execution error: {e}")

    if accepted:
        console.print("[green]✓[/green] Accepted")
    else:
        console.print("[red]✗[/red] Rejected")
        sys.exit(1)


@cli.command()
@click.argument('binary')
def mod3(binary: str):
    """Compute the remainder of a binary number divided by 3"""
    try:
        remainder = mod_three(binary)
    except AutomatonError as e:
        _fail(str(e))

    console.print(remainder)


def main():
    """Main entry point for CLI"""
    cli()


if __name__ == '__main__':
    main()
