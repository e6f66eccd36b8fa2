"""
Acceleration Partial Factory
============================

Creates the acceleration partial matching an acceleration model.

  AerodynamicAcceleration      -> AerodynamicAccelerationPartial          (numerical state partial)
  PointMassGravityAcceleration -> CentralGravitationalAccelerationPartial (analytical state partial)

Usage Example:
--------------
  partial = create_acceleration_partial(
    acceleration_model       = aerodynamic_acceleration,
    accelerated_body         = vehicle,
    accelerating_body        = earth,
    body_state_perturbations = [10.0, 10.0, 10.0, 0.01, 0.01, 0.01],
  )
"""
import numpy as np

from typing import Dict, List, Optional

from orbit_partials.errors                           import InvalidConfigurationError
from orbit_partials.model.body                       import Body
from orbit_partials.model.aerodynamics               import AerodynamicAcceleration
from orbit_partials.model.gravity                    import PointMassGravityAcceleration
from orbit_partials.estimation.acceleration_partial  import AccelerationPartial
from orbit_partials.estimation.aerodynamic_partial   import AerodynamicAccelerationPartial
from orbit_partials.estimation.gravity_partial       import CentralGravitationalAccelerationPartial


def _create_aerodynamic_partial(
  acceleration_model       : AerodynamicAcceleration,
  accelerated_body         : Body,
  accelerating_body        : Body,
  body_state_perturbations : Optional[np.ndarray],
) -> AccelerationPartial:
  return AerodynamicAccelerationPartial(
    aerodynamic_acceleration   = acceleration_model,
    flight_conditions          = acceleration_model.flight_conditions,
    vehicle_state_get_function = accelerated_body.get_state,
    vehicle_state_set_function = accelerated_body.set_state,
    accelerated_body           = accelerated_body.name,
    accelerating_body          = accelerating_body.name,
    body_state_perturbations   = body_state_perturbations,
  )


def _create_point_mass_gravity_partial(
  acceleration_model       : PointMassGravityAcceleration,
  accelerated_body         : Body,
  accelerating_body        : Body,
  body_state_perturbations : Optional[np.ndarray],
) -> AccelerationPartial:
  # Analytical partial, perturbations unused
  return CentralGravitationalAccelerationPartial(
    gravity_acceleration = acceleration_model,
    accelerated_body     = accelerated_body.name,
    accelerating_body    = accelerating_body.name,
  )


PARTIAL_CREATORS = {
  AerodynamicAcceleration      : _create_aerodynamic_partial,
  PointMassGravityAcceleration : _create_point_mass_gravity_partial,
}


def create_acceleration_partial(
  acceleration_model       : object,
  accelerated_body         : Body,
  accelerating_body        : Body,
  body_state_perturbations : Optional[np.ndarray] = None,
) -> AccelerationPartial:
  """
  Create the partial object for one acceleration model.

  Input:
  ------
    acceleration_model : object
      AerodynamicAcceleration or PointMassGravityAcceleration.
    accelerated_body : Body
      Body undergoing acceleration (its get/set state functions are used).
    accelerating_body : Body
      Body exerting acceleration.
    body_state_perturbations : np.ndarray | None
      Finite-difference steps for numerically differentiated models.

  Output:
  -------
    partial : AccelerationPartial
      Partial object for the acceleration model.

  Raises:
  -------
    InvalidConfigurationError
      If no partial implementation exists for the acceleration model.
  """
  creator = PARTIAL_CREATORS.get(type(acceleration_model))
  if creator is None:
    raise InvalidConfigurationError(
      f"No acceleration partial implemented for {type(acceleration_model).__name__} "
      f"acting on {accelerated_body.name} from {accelerating_body.name}"
    )

  return creator(acceleration_model, accelerated_body, accelerating_body, body_state_perturbations)


def create_acceleration_partials(
  acceleration_models      : Dict[str, Dict[str, List[object]]],
  bodies                   : Dict[str, Body],
  body_state_perturbations : Optional[np.ndarray] = None,
) -> List[AccelerationPartial]:
  """
  Create partial objects for a map of acceleration models.

  Input:
  ------
    acceleration_models : dict
      {accelerated body name: {accelerating body name: [acceleration models]}}
    bodies : dict
      {body name: Body}
    body_state_perturbations : np.ndarray | None
      Finite-difference steps for numerically differentiated models.

  Output:
  -------
    partials : list of AccelerationPartial
      One partial per acceleration model, in map order.

  Raises:
  -------
    InvalidConfigurationError
      If a body name is unknown or an acceleration model is unsupported.
  """
  partials = []
  for accelerated_name, models_per_accelerating_body in acceleration_models.items():
    for accelerating_name, models in models_per_accelerating_body.items():
      for name in (accelerated_name, accelerating_name):
        if name not in bodies:
          raise InvalidConfigurationError(f"Unknown body '{name}' in acceleration map. Known bodies: {list(bodies.keys())}")

      for acceleration_model in models:
        partials.append(
          create_acceleration_partial(
            acceleration_model       = acceleration_model,
            accelerated_body         = bodies[accelerated_name],
            accelerating_body        = bodies[accelerating_name],
            body_state_perturbations = body_state_perturbations,
          )
        )

  return partials
