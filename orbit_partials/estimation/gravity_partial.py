"""
Central Gravitational Acceleration Partial
==========================================

Analytical partials of the point mass gravitational acceleration

  acc_vec = -gp * pos_vec / |pos_vec|³,   pos_vec = pos_accelerated - pos_accelerating

  d acc_vec / d pos_vec = gp * ( 3 * pos_vec pos_vecᵀ / |pos_vec|⁵ - I / |pos_vec|³ )
  d acc_vec / d vel_vec = 0
  d acc_vec / d gp      = -pos_vec / |pos_vec|³

The gravitational parameter partial is registered for the accelerating body.
"""
import numpy as np

from orbit_partials.model.constants                 import STATEINDICES
from orbit_partials.model.gravity                   import PointMassGravityAcceleration
from orbit_partials.estimation.parameters           import ParameterKind
from orbit_partials.estimation.acceleration_partial import AccelerationPartial


class CentralGravitationalAccelerationPartial(AccelerationPartial):
  """
  Partials of a point mass gravitational acceleration
  """

  def __init__(
    self,
    gravity_acceleration : PointMassGravityAcceleration,
    accelerated_body     : str,
    accelerating_body    : str,
  ):
    """
    Initialize central gravity partial

    Input:
    ------
      gravity_acceleration : PointMassGravityAcceleration
        Acceleration model to differentiate.
      accelerated_body : str
        Name of the body undergoing acceleration.
      accelerating_body : str
        Name of the body exerting acceleration.

    Output:
    -------
      None
    """
    super().__init__(
      accelerated_body              = accelerated_body,
      accelerating_body             = accelerating_body,
      acceleration_type             = 'point_mass_gravity',
      dependent_state_functions     = [
        gravity_acceleration.accelerated_state_function,
        gravity_acceleration.accelerating_state_function,
      ],
      dependent_parameter_functions = [
        gravity_acceleration.gravitational_parameter_function,
      ],
    )
    self.gravity_acceleration = gravity_acceleration

    self._register_parameter_partial(
      parameter_kind   = ParameterKind.GRAVITATIONAL_PARAMETER,
      body             = accelerating_body,
      partial_function = self.compute_acceleration_partial_wrt_gravitational_parameter,
    )

  def _compute_state_partial(
    self,
    current_time : float,
  ) -> np.ndarray:
    self.gravity_acceleration.reset_time()
    self.gravity_acceleration.update_members(current_time)

    pos_vec      = self.gravity_acceleration.get_current_relative_position()
    pos_mag      = np.linalg.norm(pos_vec)
    gp           = self.gravity_acceleration.get_current_gravitational_parameter()

    state_partial = np.zeros((3, STATEINDICES.SIZE))
    state_partial[:, STATEINDICES.POSITION] = gp * (
      3.0 * np.outer(pos_vec, pos_vec) / pos_mag**5 - np.eye(3) / pos_mag**3
    )

    return state_partial

  def compute_acceleration_partial_wrt_gravitational_parameter(
    self,
    acceleration_partial : np.ndarray,
  ) -> None:
    """
    Partial of the acceleration w.r.t. the gravitational parameter [1/m²] into a 3x1 array.
    """
    pos_vec = self.gravity_acceleration.get_current_relative_position()
    pos_mag = np.linalg.norm(pos_vec)

    acceleration_partial[:, 0] = -pos_vec / pos_mag**3
