"""
Pytest Configuration and Fixtures
=================================

Shared fixtures for all validation tests.
"""
import pytest
import numpy as np

from pathlib import Path
from types   import SimpleNamespace

from orbit_partials.model.body                     import Body
from orbit_partials.model.constants                import SOLARSYSTEMCONSTANTS
from orbit_partials.model.aerodynamics             import AerodynamicAcceleration, AerodynamicCoefficientInterface
from orbit_partials.model.flight_conditions        import FlightConditions
from orbit_partials.estimation.aerodynamic_partial import AerodynamicAccelerationPartial


class ConstantAtmosphere:
  """Atmosphere with the same density at every altitude."""

  def __init__(self, density):
    self.density = density

  def get_density(self, altitude, longitude=0.0, latitude=0.0, time=0.0):
    return self.density


@pytest.fixture(scope="session")
def project_root():
  """Return the project root directory."""
  return Path(__file__).parent.parent.parent


@pytest.fixture(scope="session")
def atmosphere_tables_path(project_root):
  """Return path to the shipped atmosphere tables."""
  return project_root / "data" / "atmosphere_tables"


@pytest.fixture(scope="session")
def configurations_path(project_root):
  """Return path to the shipped configuration files."""
  return project_root / "data" / "configurations"


@pytest.fixture
def leo_initial_state():
  """Circular 400 km LEO state for testing."""
  return np.array([
    6778137.0,   # x [m]
    0.0,         # y [m]
    0.0,         # z [m]
    0.0,         # vx [m/s]
    7668.56,     # vy [m/s]
    0.0,         # vz [m/s]
  ])


@pytest.fixture
def inclined_leo_state():
  """LEO state with all position and velocity components non-zero."""
  return np.array([
    6200.0e3,    # x [m]
    2100.0e3,    # y [m]
    1500.0e3,    # z [m]
    -2500.0,     # vx [m/s]
    6300.0,      # vy [m/s]
    3400.0,      # vz [m/s]
  ])


@pytest.fixture
def make_drag_scenario():
  """
  Factory building a vehicle in the atmosphere of Earth with its drag model and partial.

  Keyword arguments:
    state, atmosphere, rotation_rate, mass, drag_coefficient, reference_area,
    body_state_perturbations
  """
  def _make(
    state,
    atmosphere               = None,
    rotation_rate            = 0.0,
    mass                     = 1000.0,
    drag_coefficient         = 2.2,
    reference_area           = 10.0,
    body_state_perturbations = None,
  ):
    if atmosphere is None:
      atmosphere = ConstantAtmosphere(1.0e-11)

    earth   = Body(name="Earth", gravitational_parameter=SOLARSYSTEMCONSTANTS.EARTH.GP)
    vehicle = Body(name="Vehicle", state=state, mass=mass)

    coefficient_interface = AerodynamicCoefficientInterface(
      reference_area   = reference_area,
      drag_coefficient = drag_coefficient,
    )
    flight_conditions = FlightConditions(
      atmosphere                        = atmosphere,
      aerodynamic_coefficient_interface = coefficient_interface,
      vehicle_state_function            = vehicle.get_state,
      central_body_state_function       = earth.get_state,
      central_body_radius               = SOLARSYSTEMCONSTANTS.EARTH.RADIUS.EQUATOR,
      central_body_rotation_rate        = rotation_rate,
    )
    acceleration = AerodynamicAcceleration(
      flight_conditions = flight_conditions,
      mass_function     = vehicle.get_mass,
    )
    partial = AerodynamicAccelerationPartial(
      aerodynamic_acceleration   = acceleration,
      flight_conditions          = flight_conditions,
      vehicle_state_get_function = vehicle.get_state,
      vehicle_state_set_function = vehicle.set_state,
      accelerated_body           = vehicle.name,
      accelerating_body          = earth.name,
      body_state_perturbations   = body_state_perturbations,
    )

    return SimpleNamespace(
      earth                 = earth,
      vehicle               = vehicle,
      atmosphere            = atmosphere,
      coefficient_interface = coefficient_interface,
      flight_conditions     = flight_conditions,
      acceleration          = acceleration,
      partial               = partial,
    )

  return _make


@pytest.fixture
def drag_scenario(make_drag_scenario, inclined_leo_state):
  """Constant density drag scenario, non-rotating atmosphere."""
  return make_drag_scenario(inclined_leo_state)


@pytest.fixture
def write_atmosphere_table(tmp_path):
  """Factory writing an atmosphere table file from a list of text lines."""
  def _write(lines, filename="table.txt"):
    filepath = tmp_path / filename
    filepath.write_text("\n".join(lines) + "\n")
    return filepath

  return _write
