"""
Configuration Tests
===================

Tests for YAML configuration loading, defaults and validation, and for the
command line.

Tests:
------
TestBuildConfig
  - test_defaults_without_file
  - test_shipped_example_file
  - test_file_overrides_defaults
  - test_epoch_and_log_filepath_overrides
  - test_exponential_atmosphere_defaults_from_central_body
  - test_empty_file_gives_defaults

TestConfigValidation
  - test_unknown_entry_raises
  - test_invalid_yaml_raises
  - test_top_level_list_raises
  - test_wrong_state_length_raises
  - test_non_positive_mass_raises
  - test_unknown_atmosphere_model_raises
  - test_zero_perturbation_raises
  - test_unknown_central_body_raises
  - test_exponential_atmosphere_without_reference_raises
  - test_non_boolean_flag_raises
  - test_missing_file_raises

TestCommandLine
  - test_arguments_parsed
  - test_optional_arguments_default_to_none
"""
import pytest
import numpy as np

from pathlib import Path

from orbit_partials.errors              import InvalidConfigurationError
from orbit_partials.input.cli           import parse_command_line_arguments
from orbit_partials.input.configuration import build_config, build_perturbation_vector


@pytest.fixture
def write_config(tmp_path):
  """Factory writing a YAML configuration file."""
  def _write(text, filename="config.yaml"):
    filepath = tmp_path / filename
    filepath.write_text(text)
    return filepath

  return _write


class TestBuildConfig:
  """Tests for build_config."""

  def test_defaults_without_file(self):
    config = build_config()

    assert config.config_filepath is None
    assert config.epoch == 0.0
    assert config.central_body.name == 'Earth'
    assert config.vehicle.mass == 1000.0
    assert config.vehicle.state.shape == (6,)
    assert config.atmosphere.model == 'tabulated'
    assert config.partials.include_gravity is True
    assert config.log_filepath is None
    assert np.array_equal(config.body_state_perturbations, [10.0, 10.0, 10.0, 0.01, 0.01, 0.01])

  def test_shipped_example_file(self, configurations_path):
    config = build_config("example_leo_drag.yaml")

    assert config.config_filepath == configurations_path / "example_leo_drag.yaml"
    assert config.vehicle.drag.coeff == 2.2
    assert config.vehicle.drag.area  == 10.0
    assert config.atmosphere.filename == 'us76_sample.txt'

  def test_file_overrides_defaults(self, write_config):
    filepath = write_config(
      "epoch: 120.0\n"
      "vehicle:\n"
      "  mass: 500.0\n"
      "  state: [7000000.0, 0.0, 0.0, 0.0, 7500.0, 0.0]\n"
      "  drag:\n"
      "    coeff: 2.0\n"
      "partials:\n"
      "  position_perturbation: 1.0\n"
      "  velocity_perturbation: 0.001\n"
      "  include_gravity: false\n"
    )

    config = build_config(filepath)

    assert config.epoch == 120.0
    assert config.vehicle.mass == 500.0
    assert config.vehicle.drag.coeff == 2.0
    assert config.vehicle.drag.area == 10.0  # default kept
    assert config.partials.include_gravity is False
    assert np.array_equal(config.vehicle.state, [7000000.0, 0.0, 0.0, 0.0, 7500.0, 0.0])
    assert np.array_equal(config.body_state_perturbations, [1.0, 1.0, 1.0, 0.001, 0.001, 0.001])

  def test_epoch_and_log_filepath_overrides(self, write_config, tmp_path):
    filepath = write_config("epoch: 10.0\n")

    config = build_config(filepath, epoch=20.0, log_filepath=tmp_path / "run.log")

    assert config.epoch == 20.0
    assert config.log_filepath == tmp_path / "run.log"

  def test_exponential_atmosphere_defaults_from_central_body(self, write_config):
    filepath = write_config("atmosphere:\n  model: exponential\n")

    config = build_config(filepath)

    assert config.atmosphere.model == 'exponential'
    assert config.atmosphere.reference_density == 1.225
    assert config.atmosphere.scale_height == 8500.0

  def test_empty_file_gives_defaults(self, write_config):
    config = build_config(write_config(""))

    assert config.epoch == 0.0
    assert config.vehicle.name == 'Vehicle'


class TestConfigValidation:
  """Tests for configuration errors."""

  def test_unknown_entry_raises(self, write_config):
    with pytest.raises(InvalidConfigurationError, match="vehicle.colour"):
      build_config(write_config("vehicle:\n  colour: red\n"))

  def test_invalid_yaml_raises(self, write_config):
    with pytest.raises(InvalidConfigurationError):
      build_config(write_config("vehicle: [unclosed\n"))

  def test_top_level_list_raises(self, write_config):
    with pytest.raises(InvalidConfigurationError):
      build_config(write_config("- 1\n- 2\n"))

  def test_wrong_state_length_raises(self, write_config):
    with pytest.raises(InvalidConfigurationError):
      build_config(write_config("vehicle:\n  state: [1.0, 2.0, 3.0]\n"))

  def test_non_positive_mass_raises(self, write_config):
    with pytest.raises(InvalidConfigurationError):
      build_config(write_config("vehicle:\n  mass: 0.0\n"))

  def test_unknown_atmosphere_model_raises(self, write_config):
    with pytest.raises(InvalidConfigurationError):
      build_config(write_config("atmosphere:\n  model: nrlmsise00\n"))

  def test_zero_perturbation_raises(self, write_config):
    with pytest.raises(InvalidConfigurationError):
      build_config(write_config("partials:\n  velocity_perturbation: 0.0\n"))
    with pytest.raises(InvalidConfigurationError):
      build_perturbation_vector(10.0, 0.0)

  def test_unknown_central_body_raises(self, write_config):
    with pytest.raises(InvalidConfigurationError):
      build_config(write_config("central_body:\n  name: Vulcan\n"))

  def test_exponential_atmosphere_without_reference_raises(self, write_config):
    with pytest.raises(InvalidConfigurationError):
      build_config(write_config("central_body:\n  name: Moon\natmosphere:\n  model: exponential\n"))

  def test_non_boolean_flag_raises(self, write_config):
    with pytest.raises(InvalidConfigurationError):
      build_config(write_config("partials:\n  include_gravity: maybe\n"))

  def test_missing_file_raises(self, tmp_path):
    with pytest.raises(FileNotFoundError):
      build_config(tmp_path / "missing.yaml")


class TestCommandLine:
  """Tests for parse_command_line_arguments."""

  def test_arguments_parsed(self):
    args = parse_command_line_arguments([
      '--config',       'example_leo_drag.yaml',
      '--epoch',        '60.0',
      '--log-filepath', 'output/run.log',
    ])

    assert args.config_filepath == 'example_leo_drag.yaml'
    assert args.epoch == 60.0
    assert Path(args.log_filepath) == Path('output/run.log')

  def test_optional_arguments_default_to_none(self):
    args = parse_command_line_arguments(['--config', 'example_leo_drag.yaml'])

    assert args.epoch is None
    assert args.log_filepath is None
