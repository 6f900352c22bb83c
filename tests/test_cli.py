"""Tests for automata CLI commands."""

import json

import pytest
import yaml
from click.testing import CliRunner

from dataknobs_automata import __version__
from dataknobs_automata.cli.main import cli
from dataknobs_automata.core.fsm import FiniteStateMachine


@pytest.fixture
def runner():
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def mod_three_file(runner, tmp_path):
    """mod_three definition created through the CLI."""
    path = tmp_path / "mod_three.yaml"
    result = runner.invoke(cli, ['config', 'create', 'mod_three', '--output', str(path)])
    assert result.exit_code == 0
    return path


class TestCLIMain:
    """Test main CLI command."""

    def test_cli_version(self, runner):
        result = runner.invoke(cli, ['--version'])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_cli_help(self, runner):
        result = runner.invoke(cli, ['--help'])
        assert result.exit_code == 0
        assert 'Automata CLI' in result.output
        assert 'config' in result.output
        assert 'run' in result.output
        assert 'mod3' in result.output


class TestConfigCommands:
    """Test config command group."""

    def test_create_yaml(self, runner, tmp_path):
        path = tmp_path / "toggle.yaml"
        result = runner.invoke(cli, ['config', 'create', 'toggle', '-o', str(path)])

        assert result.exit_code == 0
        assert 'Created toggle definition' in result.output
        data = yaml.safe_load(path.read_text())
        assert data['name'] == 'toggle'
        assert data['initial_state'] == 'OFF'

    def test_create_json(self, runner, tmp_path):
        path = tmp_path / "mod_three.json"
        result = runner.invoke(cli, ['config', 'create', 'mod_three', '-o', str(path), '-f', 'json'])

        assert result.exit_code == 0
        data = json.loads(path.read_text())
        assert data['outputs'] == {'S0': 0, 'S1': 1, 'S2': 2}

    def test_create_unknown_template(self, runner, tmp_path):
        result = runner.invoke(cli, ['config', 'create', 'nope', '-o', str(tmp_path / 'x.yaml')])
        assert result.exit_code != 0

    def test_validate_valid(self, runner, parity_yaml_file):
        result = runner.invoke(cli, ['config', 'validate', str(parity_yaml_file), '--verbose'])

        assert result.exit_code == 0
        assert 'Configuration is valid' in result.output
        assert 'Name: parity' in result.output
        assert 'Initial State: even' in result.output

    def test_validate_invalid(self, runner, tmp_path, parity_definition):
        parity_definition['initial_state'] = 'limbo'
        path = tmp_path / 'bad.yaml'
        path.write_text(yaml.safe_dump(parity_definition))

        result = runner.invoke(cli, ['config', 'validate', str(path)])

        assert result.exit_code == 1
        assert 'validation failed' in result.output
        assert 'Initial state must be included' in result.output

    def test_validate_missing_file(self, runner, tmp_path):
        result = runner.invoke(cli, ['config', 'validate', str(tmp_path / 'missing.yaml')])
        assert result.exit_code == 2

    def test_show_tree(self, runner, mod_three_file):
        result = runner.invoke(cli, ['config', 'show', str(mod_three_file)])

        assert result.exit_code == 0
        assert 'mod_three' in result.output
        assert 'S0 --1--> S1' in result.output

    def test_show_table(self, runner, mod_three_file):
        result = runner.invoke(cli, ['config', 'show', str(mod_three_file), '--format', 'table'])

        assert result.exit_code == 0
        assert 'States' in result.output
        assert 'Transitions' in result.output

    def test_show_unloadable(self, runner, tmp_path):
        path = tmp_path / 'broken.yaml'
        path.write_text(yaml.safe_dump({'name': 'broken'}))

        result = runner.invoke(cli, ['config', 'show', str(path)])

        assert result.exit_code == 1
        assert 'Error loading configuration' in result.output

    def test_validate_malformed_yaml(self, runner, tmp_path):
        path = tmp_path / 'broken.yaml'
        path.write_text("name: x\nstates: [S0\n")

        result = runner.invoke(cli, ['config', 'validate', str(path)])

        assert result.exit_code == 1
        assert 'Invalid YAML' in result.output

    @pytest.mark.parametrize('format', ['tree', 'table'])
    def test_show_escapes_markup_in_names(self, runner, tmp_path, format):
        """Test that names resembling rich markup are printed literally."""
        path = tmp_path / 'lamp.yaml'
        path.write_text(yaml.safe_dump({
            'name': '[/]lamp',
            'states': ['[b]on', 'off'],
            'alphabet': ['[t]'],
            'initial_state': 'off',
            'transitions': {'[b]on': {'[t]': 'off'}, 'off': {'[t]': '[b]on'}},
            'outputs': {'[b]on': 'ON', 'off': 'OFF'},
        }))

        result = runner.invoke(cli, ['config', 'show', str(path), '--format', format])

        assert result.exit_code == 0
        assert '[/]lamp' in result.output
        assert '[b]on' in result.output
        if format == 'tree':
            assert '[b]on --[t]--> off' in result.output
        else:
            assert '[t]' in result.output

    def test_schema(self, runner):
        result = runner.invoke(cli, ['config', 'schema'])

        assert result.exit_code == 0
        assert 'initial_state' in result.output


class TestRunCommands:
    """Test run command group."""

    def test_process(self, runner, mod_three_file):
        result = runner.invoke(cli, ['run', 'process', str(mod_three_file), '1010', '--output-value', '-v'])

        assert result.exit_code == 0
        assert 'Final state: S1' in result.output
        assert 'Accepted: True' in result.output
        assert 'Steps: 4' in result.output
        assert 'Output: 1' in result.output
        assert 'Execution Path' in result.output

    def test_process_with_separator(self, runner, tmp_path):
        path = tmp_path / 'toggle.yaml'
        runner.invoke(cli, ['config', 'create', 'toggle', '-o', str(path)])

        result = runner.invoke(
            cli, ['run', 'process', str(path), 'TOGGLE,TOGGLE,TOGGLE', '-s', ',', '-o']
        )

        assert result.exit_code == 0
        assert 'Final state: ON' in result.output
        assert "Output: 'Light is ON'" in result.output

    def test_process_invalid_symbol(self, runner, mod_three_file):
        result = runner.invoke(cli, ['run', 'process', str(mod_three_file), '102'])

        assert result.exit_code == 1
        assert 'Invalid input symbol' in result.output

    def test_process_non_final_output(self, runner, parity_yaml_file):
        result = runner.invoke(cli, ['run', 'process', str(parity_yaml_file), '1', '-o'])

        assert result.exit_code == 1
        assert 'non-final state' in result.output

    def test_process_malformed_yaml(self, runner, tmp_path):
        path = tmp_path / 'broken.yaml'
        path.write_text("name: x\nstates: [S0\n")

        result = runner.invoke(cli, ['run', 'process', str(path), '0'])

        assert result.exit_code == 1
        assert 'Invalid YAML' in result.output

    def test_process_output_value_runs_input_once(self, runner, mod_three_file, monkeypatch):
        """Test that --output-value maps the recorded result instead of re-running."""
        executions = []
        execute = FiniteStateMachine._execute

        def counting_execute(self, input, path):
            executions.append(list(input))
            return execute(self, executions[-1], path)

        monkeypatch.setattr(FiniteStateMachine, '_execute', counting_execute)

        result = runner.invoke(cli, ['run', 'process', str(mod_three_file), '110', '-o'])

        assert result.exit_code == 0
        assert 'Output: 0' in result.output
        assert executions == [['1', '1', '0']]

    def test_process_verbose_escapes_state_names(self, runner, tmp_path):
        path = tmp_path / 'lamp.yaml'
        path.write_text(yaml.safe_dump({
            'name': 'lamp',
            'states': ['[b]on', 'off'],
            'alphabet': ['t'],
            'initial_state': 'off',
            'transitions': {'[b]on': {'t': 'off'}, 'off': {'t': '[b]on'}},
        }))

        result = runner.invoke(cli, ['run', 'process', str(path), 't', '-v'])

        assert result.exit_code == 0
        assert 'Final state: [b]on' in result.output
        assert '1. [b]on' in result.output

    def test_accepts(self, runner, parity_yaml_file):
        result = runner.invoke(cli, ['run', 'accepts', str(parity_yaml_file), '11'])

        assert result.exit_code == 0
        assert 'Accepted' in result.output

    def test_rejects(self, runner, parity_yaml_file):
        result = runner.invoke(cli, ['run', 'accepts', str(parity_yaml_file), '1'])

        assert result.exit_code == 1
        assert 'Rejected' in result.output


class TestModThreeCommand:
    """Test the mod3 shortcut."""

    @pytest.mark.parametrize("binary,expected", [("110", "0"), ("101", "2"), ("1010", "1")])
    def test_remainder(self, runner, binary, expected):
        result = runner.invoke(cli, ['mod3', binary])

        assert result.exit_code == 0
        assert result.output.strip() == expected

    def test_invalid_input(self, runner):
        result = runner.invoke(cli, ['mod3', '10a1'])

        assert result.exit_code == 1
        assert 'only 0s and 1s' in result.output

    def test_verbose_logging(self, runner):
        result = runner.invoke(cli, ['--verbose', 'mod3', '11'])
        assert result.exit_code == 0
