"""
Aerodynamic Acceleration Module
===============================

Aerodynamic force model of a vehicle in the atmosphere of a central body.

Class Structure:
----------------
  AerodynamicCoefficientInterface (constant C_D, C_S, C_L and reference area)
  AerodynamicAcceleration         (cached force model driven by FlightConditions)

The acceleration is computed in the aerodynamic frame and rotated to inertial:

  acc_vec = R_aero_to_xyz @ (-[C_D, C_S, C_L]) * 0.5 * rho * V² * S / m

For C_S = C_L = 0 this is the classical drag acceleration
  acc_vec = -0.5 * rho * C_D * S / m * V * v_air_vec

AerodynamicAcceleration follows the cached-model cycle used by the partials:
update_members(time) recomputes only for a time different from the cached one,
reset_time() invalidates the cache, get_acceleration() returns the cached value.
The flight conditions must have been updated for the same time beforehand.

Units:
------
- Acceleration : meters per second squared [m/s²]
- Area         : square meters [m²]
- Mass         : kilograms [kg]
"""
import numpy as np

from typing import Callable

from orbit_partials.errors          import InvalidConfigurationError
from orbit_partials.model.constants import TIME_NAN


class AerodynamicCoefficientInterface:
  """
  Constant aerodynamic force coefficients of a vehicle
  """

  def __init__(
    self,
    reference_area   : float,
    drag_coefficient : float,
    side_coefficient : float = 0.0,
    lift_coefficient : float = 0.0,
  ):
    """
    Initialize coefficient interface

    Input:
    ------
      reference_area : float
        Aerodynamic reference area [m²].
      drag_coefficient : float
        Drag coefficient C_D.
      side_coefficient : float
        Side force coefficient C_S.
      lift_coefficient : float
        Lift coefficient C_L.

    Output:
    -------
      None
    """
    if reference_area <= 0:
      raise InvalidConfigurationError(f"Aerodynamic reference area must be positive, got {reference_area}")

    self.reference_area   = reference_area
    self.drag_coefficient = drag_coefficient
    self.side_coefficient = side_coefficient
    self.lift_coefficient = lift_coefficient

  def get_reference_area(
    self,
  ) -> float:
    return self.reference_area

  def get_drag_coefficient(
    self,
  ) -> float:
    return self.drag_coefficient

  def set_drag_coefficient(
    self,
    drag_coefficient : float,
  ) -> None:
    self.drag_coefficient = drag_coefficient

  def get_current_force_coefficients(
    self,
  ) -> np.ndarray:
    """
    Force coefficients [C_D, C_S, C_L] in the aerodynamic frame.
    """
    return np.array([self.drag_coefficient, self.side_coefficient, self.lift_coefficient])


class AerodynamicAcceleration:
  """
  Aerodynamic acceleration of a vehicle
  """

  def __init__(
    self,
    flight_conditions : "FlightConditions",
    mass_function     : Callable[[], float],
  ):
    """
    Initialize aerodynamic acceleration model

    Input:
    ------
      flight_conditions : FlightConditions
        Conditions model providing density, airspeed and frame rotation.
      mass_function : callable
        Returns the current vehicle mass [kg].

    Output:
    -------
      None
    """
    self.flight_conditions = flight_conditions
    self.mass_function     = mass_function

    self.current_time     = TIME_NAN
    self._current_acc_vec = np.zeros(3)
    self._current_mass    = 0.0

  def update_members(
    self,
    time : float = TIME_NAN,
  ) -> None:
    """
    Recompute the acceleration if time differs from the cached time.

    Input:
    ------
      time : float
        Current time [s]. The flight conditions must be current for this time.

    Output:
    -------
      None
    """
    if time == self.current_time:
      return

    mass = self.mass_function()
    if mass <= 0:
      raise ValueError(f"Vehicle mass must be positive to compute aerodynamic acceleration, got {mass}")

    coefficient_interface = self.flight_conditions.get_aerodynamic_coefficient_interface()
    force_coefficients    = coefficient_interface.get_current_force_coefficients()
    dynamic_pressure      = self.flight_conditions.get_current_dynamic_pressure()
    rot_mat_aero_to_xyz   = self.flight_conditions.get_rotation_aerodynamic_to_inertial()

    # Forces act opposite to the aerodynamic frame axes (drag opposes airspeed)
    acc_mag_factor = dynamic_pressure * coefficient_interface.get_reference_area() / mass

    self._current_acc_vec = rot_mat_aero_to_xyz @ (-force_coefficients) * acc_mag_factor
    self._current_mass    = mass
    self.current_time     = time

  def reset_time(
    self,
    time : float = TIME_NAN,
  ) -> None:
    """
    Reset the cached time. The default (not-a-time) forces recomputation on the next update.
    """
    self.current_time = time

  def get_acceleration(
    self,
  ) -> np.ndarray:
    return self._current_acc_vec.copy()

  def get_current_mass(
    self,
  ) -> float:
    return self._current_mass
