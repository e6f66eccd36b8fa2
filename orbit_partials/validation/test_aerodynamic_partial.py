"""
Aerodynamic Acceleration Partial Tests
======================================

Regression tests for the numerical drag state partial and the analytical drag
coefficient partial, against analytical drag derivatives.

For a non-rotating atmosphere with C_S = C_L = 0 the drag acceleration is

  acc_vec = -k * V * vel_vec,    k = 0.5 * rho * C_D * S / m

so that

  d acc_vec / d vel_vec = -k * ( V * I + vel_vec vel_vecᵀ / V )
  d acc_vec / d pos_vec = -acc_vec pos_hatᵀ / H          (exponential density)
  d acc_vec / d C_D     =  acc_vec / C_D

Tests:
------
TestDragStatePartial
  - test_velocity_partial_constant_density        : k v² scenario
  - test_millimetre_steps_constant_density        : 1e-3 steps, both blocks from one update
  - test_position_partial_zero_for_constant_density
  - test_position_partial_exponential_density
  - test_partials_rotating_atmosphere             : airspeed relative to co-rotating atmosphere
  - test_default_perturbations

TestStateRestoration
  - test_state_restored_exactly
  - test_models_current_at_nominal_state
  - test_update_is_deterministic
  - test_state_restored_when_model_raises
  - test_failed_update_invalidates_previous_partial
  - test_zero_perturbation_rejected

TestDragCoefficientPartial
  - test_registered_for_accelerated_body
  - test_matches_acceleration_over_drag_coefficient
  - test_matches_finite_difference_in_drag_coefficient
  - test_no_dependency_on_gravitational_parameter
"""
import pytest
import numpy as np

from orbit_partials.errors                         import InvalidConfigurationError, StaleStateError
from orbit_partials.model.atmosphere               import ExponentialAtmosphere
from orbit_partials.model.constants                import SOLARSYSTEMCONSTANTS
from orbit_partials.estimation.aerodynamic_partial import DEFAULT_BODY_STATE_PERTURBATIONS
from orbit_partials.estimation.parameters          import (
  EstimatableParameter,
  ParameterKind,
  create_drag_coefficient_parameter,
)


VELOCITY_STEP_PERTURBATIONS = [10.0, 10.0, 10.0, 1.0e-3, 1.0e-3, 1.0e-3]


def _drag_factor(density, drag_coefficient=2.2, reference_area=10.0, mass=1000.0):
  return 0.5 * density * drag_coefficient * reference_area / mass


def _analytical_velocity_partial(k, airspeed_vec):
  airspeed = np.linalg.norm(airspeed_vec)
  return -k * (airspeed * np.eye(3) + np.outer(airspeed_vec, airspeed_vec) / airspeed)


def _assert_close(actual, expected, rtol):
  atol = rtol * np.max(np.abs(expected))
  assert np.allclose(actual, expected, rtol=rtol, atol=atol)


class FailingAtmosphere:
  """Constant density atmosphere raising on one chosen call."""

  def __init__(self, density, failing_call):
    self.density      = density
    self.failing_call = failing_call
    self.n_calls      = 0

  def get_density(self, altitude, longitude=0.0, latitude=0.0, time=0.0):
    self.n_calls += 1
    if self.n_calls == self.failing_call:
      raise RuntimeError("atmosphere unavailable")
    return self.density


class TestDragStatePartial:
  """Tests for the numerical state partial of the drag acceleration."""

  def test_velocity_partial_constant_density(self, make_drag_scenario, inclined_leo_state):
    """Test the velocity partial of a k v² drag against the analytical derivative."""
    density  = 1.0e-11
    scenario = make_drag_scenario(
      inclined_leo_state,
      body_state_perturbations = VELOCITY_STEP_PERTURBATIONS,
    )

    scenario.partial.update(0.0)

    vel_block = np.zeros((3, 3))
    scenario.partial.wrt_velocity_of_accelerated_body(vel_block)

    expected = _analytical_velocity_partial(_drag_factor(density), inclined_leo_state[3:6])
    _assert_close(vel_block, expected, rtol=1e-4)

  def test_millimetre_steps_constant_density(self, make_drag_scenario, leo_initial_state):
    """Test both blocks of one update with 1e-3 steps in all six components, constant density."""
    density  = 1.0e-11
    scenario = make_drag_scenario(
      leo_initial_state,
      body_state_perturbations = np.full(6, 1.0e-3),
    )

    scenario.partial.update(0.0)
    state_partial = scenario.partial.get_current_state_partial()

    expected_vel = _analytical_velocity_partial(_drag_factor(density), leo_initial_state[3:6])

    assert np.allclose(state_partial[:, 0:3], 0.0, atol=1e-20)
    _assert_close(state_partial[:, 3:6], expected_vel, rtol=1e-6)

  def test_position_partial_zero_for_constant_density(self, drag_scenario):
    drag_scenario.partial.update(0.0)

    pos_block = np.zeros((3, 3))
    drag_scenario.partial.wrt_position_of_accelerated_body(pos_block)

    assert np.allclose(pos_block, 0.0, atol=1e-20)

  def test_position_partial_exponential_density(self, make_drag_scenario, inclined_leo_state):
    """Test the position partial produced by the density gradient of an exponential atmosphere."""
    scale_height = SOLARSYSTEMCONSTANTS.EARTH.H_0
    scenario = make_drag_scenario(
      inclined_leo_state,
      atmosphere = ExponentialAtmosphere(rho_0=SOLARSYSTEMCONSTANTS.EARTH.RHO_0, scale_height=scale_height),
    )

    scenario.partial.update(0.0)

    pos_vec  = inclined_leo_state[0:3]
    pos_hat  = pos_vec / np.linalg.norm(pos_vec)
    acc_vec  = scenario.acceleration.get_acceleration()
    expected = -np.outer(acc_vec, pos_hat) / scale_height

    pos_block = np.zeros((3, 3))
    scenario.partial.wrt_position_of_accelerated_body(pos_block)

    _assert_close(pos_block, expected, rtol=1e-5)

  def test_partials_rotating_atmosphere(self, make_drag_scenario, inclined_leo_state):
    """Test both blocks for an atmosphere co-rotating with Earth."""
    density  = 1.0e-11
    omega    = SOLARSYSTEMCONSTANTS.EARTH.OMEGA
    scenario = make_drag_scenario(
      inclined_leo_state,
      rotation_rate            = omega,
      body_state_perturbations = VELOCITY_STEP_PERTURBATIONS,
    )

    scenario.partial.update(0.0)
    state_partial = scenario.partial.get_current_state_partial()

    omega_vec    = np.array([0.0, 0.0, omega])
    airspeed_vec = inclined_leo_state[3:6] - np.cross(omega_vec, inclined_leo_state[0:3])
    skew_omega   = np.array([
      [0.0,   -omega, 0.0],
      [omega,  0.0,   0.0],
      [0.0,    0.0,   0.0],
    ])

    expected_vel = _analytical_velocity_partial(_drag_factor(density), airspeed_vec)
    expected_pos = expected_vel @ (-skew_omega)

    _assert_close(state_partial[:, 3:6], expected_vel, rtol=1e-4)
    _assert_close(state_partial[:, 0:3], expected_pos, rtol=1e-4)

  def test_default_perturbations(self, drag_scenario):
    assert np.array_equal(drag_scenario.partial.body_state_perturbations, DEFAULT_BODY_STATE_PERTURBATIONS)
    assert np.array_equal(DEFAULT_BODY_STATE_PERTURBATIONS, [10.0, 10.0, 10.0, 0.01, 0.01, 0.01])


class TestStateRestoration:
  """Tests for the perturb/evaluate/restore cycle."""

  def test_state_restored_exactly(self, drag_scenario, inclined_leo_state):
    """Test that the vehicle state is bit-identical after update."""
    drag_scenario.partial.update(0.0)

    assert np.array_equal(drag_scenario.vehicle.get_state(), inclined_leo_state)

  def test_models_current_at_nominal_state(self, drag_scenario):
    """Test that the conditions and acceleration caches hold the nominal values after update."""
    drag_scenario.partial.update(5.0)
    acc_after_update = drag_scenario.acceleration.get_acceleration()

    assert drag_scenario.flight_conditions.current_time == 5.0
    assert drag_scenario.acceleration.current_time      == 5.0
    assert drag_scenario.flight_conditions.get_current_density() == 1.0e-11

    drag_scenario.flight_conditions.reset_current_time()
    drag_scenario.acceleration.reset_time()
    drag_scenario.flight_conditions.update_conditions(5.0)
    drag_scenario.acceleration.update_members(5.0)

    assert np.array_equal(drag_scenario.acceleration.get_acceleration(), acc_after_update)

  def test_update_is_deterministic(self, drag_scenario):
    drag_scenario.partial.update(0.0)
    first = drag_scenario.partial.get_current_state_partial()

    drag_scenario.partial.update(0.0)
    second = drag_scenario.partial.get_current_state_partial()

    assert np.array_equal(first, second)

  def test_state_restored_when_model_raises(self, make_drag_scenario, inclined_leo_state):
    """Test that a model failure during a perturbed evaluation leaves the nominal state in place."""
    scenario = make_drag_scenario(
      inclined_leo_state,
      atmosphere = FailingAtmosphere(density=1.0e-11, failing_call=3),
    )

    with pytest.raises(RuntimeError):
      scenario.partial.update(0.0)

    assert np.array_equal(scenario.vehicle.get_state(), inclined_leo_state)
    assert not scenario.partial.is_updated

  def test_failed_update_invalidates_previous_partial(self, make_drag_scenario, inclined_leo_state):
    """Test that a failure at a later epoch leaves no partial of the earlier epoch readable."""
    scenario = make_drag_scenario(
      inclined_leo_state,
      atmosphere = FailingAtmosphere(density=1.0e-11, failing_call=16),
    )
    scenario.partial.update(0.0)
    assert scenario.partial.is_updated

    with pytest.raises(RuntimeError):
      scenario.partial.update(60.0)

    assert np.array_equal(scenario.vehicle.get_state(), inclined_leo_state)
    assert not scenario.partial.is_updated
    assert np.isnan(scenario.partial.current_time)
    with pytest.raises(StaleStateError):
      scenario.partial.wrt_velocity_of_accelerated_body(np.zeros((3, 3)))
    with pytest.raises(StaleStateError):
      scenario.partial.get_current_state_partial()

  def test_zero_perturbation_rejected(self, make_drag_scenario, inclined_leo_state):
    with pytest.raises(InvalidConfigurationError):
      make_drag_scenario(inclined_leo_state, body_state_perturbations=[10.0, 10.0, 0.0, 0.01, 0.01, 0.01])


class TestDragCoefficientPartial:
  """Tests for the analytical drag coefficient partial."""

  def test_registered_for_accelerated_body(self, drag_scenario):
    parameter = create_drag_coefficient_parameter("Vehicle", drag_scenario.coefficient_interface)
    _, column_count = drag_scenario.partial.get_parameter_partial_function(parameter)
    assert column_count == 1

    other_parameter = EstimatableParameter(ParameterKind.CONSTANT_DRAG_COEFFICIENT, "Earth", lambda: 1.0)
    assert drag_scenario.partial.get_parameter_partial_function(other_parameter) == (None, 0)

  def test_matches_acceleration_over_drag_coefficient(self, drag_scenario):
    """Test that d acc / d C_D = acc / C_D for a drag-only coefficient set."""
    drag_scenario.partial.update(0.0)
    parameter = create_drag_coefficient_parameter("Vehicle", drag_scenario.coefficient_interface)
    partial_function, _ = drag_scenario.partial.get_parameter_partial_function(parameter)

    block = np.zeros((3, 1))
    partial_function(block)

    expected = drag_scenario.acceleration.get_acceleration() / drag_scenario.coefficient_interface.get_drag_coefficient()
    assert np.allclose(block[:, 0], expected, rtol=1e-12, atol=0.0)

    # Drag opposes the airspeed
    airspeed_vec = drag_scenario.flight_conditions.get_current_airspeed_velocity()
    assert np.dot(block[:, 0], airspeed_vec) < 0

  def test_matches_finite_difference_in_drag_coefficient(self, drag_scenario):
    """Test the drag coefficient partial against a central difference of the acceleration."""
    drag_scenario.partial.update(0.0)
    parameter = create_drag_coefficient_parameter("Vehicle", drag_scenario.coefficient_interface)
    partial_function, _ = drag_scenario.partial.get_parameter_partial_function(parameter)

    block = np.zeros((3, 1))
    partial_function(block)

    def acceleration_at(drag_coefficient):
      parameter.set_value(drag_coefficient)
      drag_scenario.acceleration.reset_time()
      drag_scenario.acceleration.update_members(0.0)
      return drag_scenario.acceleration.get_acceleration()

    nominal_drag_coefficient = parameter.get_value()
    step = 1.0e-3
    finite_difference = (acceleration_at(nominal_drag_coefficient + step) - acceleration_at(nominal_drag_coefficient - step)) / (2.0 * step)
    parameter.set_value(nominal_drag_coefficient)

    _assert_close(block[:, 0], finite_difference, rtol=1e-8)

  def test_no_dependency_on_gravitational_parameter(self, drag_scenario):
    parameter = EstimatableParameter(ParameterKind.GRAVITATIONAL_PARAMETER, "Earth", lambda: 1.0)

    assert drag_scenario.partial.get_parameter_partial_function(parameter) == (None, 0)
