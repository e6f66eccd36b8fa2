"""
Flight Conditions Module
========================

Environment state of a vehicle flying through the atmosphere of a central body.

FlightConditions is the cached conditions model driven by the aerodynamic
acceleration and its partial. update_conditions(time) recomputes, from the
vehicle and central body states,

  - altitude above the central body's equatorial radius
  - airspeed velocity (velocity relative to the co-rotating atmosphere)
  - density from the atmosphere model
  - rotation between the inertial and aerodynamic frames

only when the requested time differs from the cached one. reset_current_time()
sets the cached time to the not-a-time sentinel so that the next update always
recomputes, which is how callers force recomputation after changing a state in
place.

Units:
------
- Position : meters [m]
- Velocity : meters per second [m/s]
- Density  : kilograms per cubic meter [kg/m³]
"""
import numpy as np

from typing import Callable, Optional

from orbit_partials.model.constants       import TIME_NAN, STATEINDICES
from orbit_partials.model.aerodynamics    import AerodynamicCoefficientInterface
from orbit_partials.model.frame_converter import FrameConverter


class FlightConditions:
  """
  Cached atmospheric flight conditions of a vehicle
  """

  def __init__(
    self,
    atmosphere                        : object,
    aerodynamic_coefficient_interface : AerodynamicCoefficientInterface,
    vehicle_state_function            : Callable[[], np.ndarray],
    central_body_state_function       : Optional[Callable[[], np.ndarray]] = None,
    central_body_radius               : float                                = 0.0,
    central_body_rotation_rate        : float                                = 0.0,
  ):
    """
    Initialize flight conditions

    Input:
    ------
      atmosphere : object
        Atmosphere model with get_density(altitude, longitude, latitude, time).
      aerodynamic_coefficient_interface : AerodynamicCoefficientInterface
        Force coefficients and reference area of the vehicle.
      vehicle_state_function : callable
        Returns the inertial Cartesian state of the vehicle [m, m/s].
      central_body_state_function : callable | None
        Returns the inertial Cartesian state of the central body. None places the
        central body at rest in the origin.
      central_body_radius : float
        Reference radius for altitude computation [m].
      central_body_rotation_rate : float
        Rotation rate of the atmosphere about the inertial z-axis [rad/s].

    Output:
    -------
      None
    """
    self.atmosphere                        = atmosphere
    self.aerodynamic_coefficient_interface = aerodynamic_coefficient_interface
    self.vehicle_state_function            = vehicle_state_function
    self.central_body_state_function       = central_body_state_function
    self.central_body_radius               = central_body_radius
    self.central_body_rotation_rate        = central_body_rotation_rate

    self.current_time = TIME_NAN

    self._airspeed_vec        = np.zeros(3)
    self._density             = 0.0
    self._rot_mat_aero_to_xyz = np.eye(3)

  def update_conditions(
    self,
    time : float,
  ) -> None:
    """
    Recompute the flight conditions if time differs from the cached time.

    Input:
    ------
      time : float
        Current time [s].

    Output:
    -------
      None
    """
    # NaN never equals anything, so a NaN cache or request always recomputes
    if time == self.current_time:
      return

    vehicle_state = self.vehicle_state_function()
    if self.central_body_state_function is not None:
      relative_state = vehicle_state - self.central_body_state_function()
    else:
      relative_state = vehicle_state

    pos_vec = relative_state[STATEINDICES.POSITION]
    vel_vec = relative_state[STATEINDICES.VELOCITY]

    # Velocity relative to rotating atmosphere
    omega_vec    = np.array([0.0, 0.0, self.central_body_rotation_rate])
    airspeed_vec = vel_vec - np.cross(omega_vec, pos_vec)

    # Altitude above spherical central body
    altitude = float(np.linalg.norm(pos_vec)) - self.central_body_radius

    self._airspeed_vec        = airspeed_vec
    self._density             = self.atmosphere.get_density(altitude, 0.0, 0.0, time)
    self._rot_mat_aero_to_xyz = FrameConverter.aerodynamic_to_xyz(pos_vec, airspeed_vec)

    self.current_time = time

  def reset_current_time(
    self,
    time : float = TIME_NAN,
  ) -> None:
    """
    Reset the cached time. The default (not-a-time) forces recomputation on the next update.
    """
    self.current_time = time

  def get_current_density(
    self,
  ) -> float:
    return self._density

  def get_current_airspeed(
    self,
  ) -> float:
    return float(np.linalg.norm(self._airspeed_vec))

  def get_current_airspeed_velocity(
    self,
  ) -> np.ndarray:
    return self._airspeed_vec.copy()

  def get_current_dynamic_pressure(
    self,
  ) -> float:
    """
    Dynamic pressure 0.5 * rho * V² [N/m²].
    """
    return 0.5 * self.get_current_density() * self.get_current_airspeed()**2

  def get_rotation_aerodynamic_to_inertial(
    self,
  ) -> np.ndarray:
    """
    Rotation matrix such that: xyz_vec = rot_mat @ aero_vec
    """
    return self._rot_mat_aero_to_xyz.copy()

  def get_aerodynamic_coefficient_interface(
    self,
  ) -> AerodynamicCoefficientInterface:
    return self.aerodynamic_coefficient_interface
