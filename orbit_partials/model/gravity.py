"""
Point Mass Gravity Module
=========================

Point mass gravitational acceleration exerted by one body on another, in the
cached-model form used by the acceleration partials.

  acc_vec = -gp * pos_vec / |pos_vec|³,   pos_vec = pos_accelerated - pos_accelerating

Units:
------
- Position     : meters [m]
- Acceleration : meters per second squared [m/s²]
- GP           : cubic meters per second squared [m³/s²]
"""
import numpy as np

from typing import Callable

from orbit_partials.model.constants import TIME_NAN, STATEINDICES


class PointMassGravityAcceleration:
  """
  Two-body point mass gravity
  """

  def __init__(
    self,
    gravitational_parameter_function : Callable[[], float],
    accelerated_state_function       : Callable[[], np.ndarray],
    accelerating_state_function      : Callable[[], np.ndarray],
  ):
    """
    Initialize point mass gravity model

    Input:
    ------
      gravitational_parameter_function : callable
        Returns the gravitational parameter of the body exerting gravity [m³/s²].
      accelerated_state_function : callable
        Returns the Cartesian state of the body undergoing acceleration [m, m/s].
      accelerating_state_function : callable
        Returns the Cartesian state of the body exerting acceleration [m, m/s].

    Output:
    -------
      None
    """
    self.gravitational_parameter_function = gravitational_parameter_function
    self.accelerated_state_function       = accelerated_state_function
    self.accelerating_state_function      = accelerating_state_function

    self.current_time                     = TIME_NAN
    self._current_gp                      = 0.0
    self._current_pos_vec                 = np.zeros(3)
    self._current_acc_vec                 = np.zeros(3)

  def update_members(
    self,
    time : float = TIME_NAN,
  ) -> None:
    """
    Recompute the acceleration if time differs from the cached time.
    """
    if time == self.current_time:
      return

    pos_vec = (
      self.accelerated_state_function()[STATEINDICES.POSITION]
      - self.accelerating_state_function()[STATEINDICES.POSITION]
    )
    pos_mag = np.linalg.norm(pos_vec)
    if pos_mag == 0:
      raise ValueError("Point mass gravity is undefined for coincident bodies")

    gp = self.gravitational_parameter_function()

    self._current_gp      = gp
    self._current_pos_vec = pos_vec
    self._current_acc_vec = -gp * pos_vec / pos_mag**3
    self.current_time     = time

  def reset_time(
    self,
    time : float = TIME_NAN,
  ) -> None:
    self.current_time = time

  def get_acceleration(
    self,
  ) -> np.ndarray:
    return self._current_acc_vec.copy()

  def get_current_relative_position(
    self,
  ) -> np.ndarray:
    """
    Position of the accelerated body w.r.t. the accelerating body [m] at the last update.
    """
    return self._current_pos_vec.copy()

  def get_current_gravitational_parameter(
    self,
  ) -> float:
    return self._current_gp
