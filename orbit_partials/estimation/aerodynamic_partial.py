"""
Aerodynamic Acceleration Partial
================================

Partials of the aerodynamic acceleration of a vehicle.

State partial (numerical):
  Central differences over the six components of the vehicle's Cartesian state.
  Each perturbed evaluation
    1. resets the flight conditions and acceleration caches (not-a-time),
    2. sets the perturbed vehicle state,
    3. updates flight conditions and acceleration for the current time,
    4. reads the acceleration,
    5. restores the nominal state and resets the caches again,
  and step 5 runs even when a model raises. After the twelve evaluations the
  models are recomputed at the nominal state, so other users of the vehicle
  state and of the models see no trace of the perturbations.

Drag coefficient partial (analytical):
  d acc_vec / d C_D = R_aero_to_xyz @ [-1, 0, 0] * 0.5 * rho * V² * S / m
  registered for the constant drag coefficient of the accelerated body.
"""
import numpy as np

from contextlib import contextmanager
from typing     import Callable, Optional

from orbit_partials.model.constants                 import TIME_NAN, STATEINDICES
from orbit_partials.model.aerodynamics              import AerodynamicAcceleration
from orbit_partials.model.flight_conditions         import FlightConditions
from orbit_partials.estimation.parameters           import ParameterKind
from orbit_partials.estimation.finite_difference    import compute_central_difference_jacobian, validate_perturbations
from orbit_partials.estimation.acceleration_partial import AccelerationPartial


# Position [m] and velocity [m/s] steps
DEFAULT_BODY_STATE_PERTURBATIONS = np.array([10.0, 10.0, 10.0, 1.0e-2, 1.0e-2, 1.0e-2])


class AerodynamicAccelerationPartial(AccelerationPartial):
  """
  Partials of an aerodynamic acceleration
  """

  def __init__(
    self,
    aerodynamic_acceleration   : AerodynamicAcceleration,
    flight_conditions          : FlightConditions,
    vehicle_state_get_function : Callable[[], np.ndarray],
    vehicle_state_set_function : Callable[[np.ndarray], None],
    accelerated_body           : str,
    accelerating_body          : str,
    body_state_perturbations   : Optional[np.ndarray] = None,
  ):
    """
    Initialize aerodynamic acceleration partial

    Input:
    ------
      aerodynamic_acceleration : AerodynamicAcceleration
        Acceleration model to differentiate.
      flight_conditions : FlightConditions
        Conditions model the acceleration depends on.
      vehicle_state_get_function : callable
        Returns the Cartesian state of the vehicle [m, m/s].
      vehicle_state_set_function : callable
        Overwrites the Cartesian state of the vehicle.
      accelerated_body : str
        Name of the vehicle.
      accelerating_body : str
        Name of the central body whose atmosphere exerts the acceleration.
      body_state_perturbations : np.ndarray | None
        Finite-difference steps [m, m, m, m/s, m/s, m/s]. Defaults to
        DEFAULT_BODY_STATE_PERTURBATIONS.

    Output:
    -------
      None

    Raises:
    -------
      InvalidConfigurationError
        If any perturbation is zero, not finite, or the vector length is not 6.
    """
    dependent_state_functions = [vehicle_state_get_function]
    if flight_conditions.central_body_state_function is not None:
      dependent_state_functions.append(flight_conditions.central_body_state_function)

    coefficient_interface = flight_conditions.get_aerodynamic_coefficient_interface()

    super().__init__(
      accelerated_body              = accelerated_body,
      accelerating_body             = accelerating_body,
      acceleration_type             = 'aerodynamic',
      dependent_state_functions     = dependent_state_functions,
      dependent_parameter_functions = [
        coefficient_interface.get_current_force_coefficients,
        coefficient_interface.get_reference_area,
        aerodynamic_acceleration.mass_function,
      ],
    )

    if body_state_perturbations is None:
      body_state_perturbations = DEFAULT_BODY_STATE_PERTURBATIONS

    self._body_state_perturbations = validate_perturbations(body_state_perturbations, STATEINDICES.SIZE)
    self._body_state_perturbations.setflags(write=False)

    self.aerodynamic_acceleration   = aerodynamic_acceleration
    self.flight_conditions          = flight_conditions
    self.vehicle_state_get_function = vehicle_state_get_function
    self.vehicle_state_set_function = vehicle_state_set_function

    self._register_parameter_partial(
      parameter_kind   = ParameterKind.CONSTANT_DRAG_COEFFICIENT,
      body             = accelerated_body,
      partial_function = self.compute_acceleration_partial_wrt_current_drag_coefficient,
    )

  @property
  def body_state_perturbations(self) -> np.ndarray:
    return self._body_state_perturbations

  def _reset_models(
    self,
  ) -> None:
    self.flight_conditions.reset_current_time(TIME_NAN)
    self.aerodynamic_acceleration.reset_time(TIME_NAN)

  def _update_models(
    self,
    current_time : float,
  ) -> None:
    self.flight_conditions.update_conditions(current_time)
    self.aerodynamic_acceleration.update_members(current_time)

  @contextmanager
  def _perturbed_vehicle_state(
    self,
    perturbed_state : np.ndarray,
    nominal_state   : np.ndarray,
  ):
    """
    Set a perturbed vehicle state with invalidated model caches; restore on exit.
    """
    self._reset_models()
    self.vehicle_state_set_function(perturbed_state)
    try:
      yield
    finally:
      self.vehicle_state_set_function(nominal_state)
      self._reset_models()

  def _compute_perturbed_acceleration(
    self,
    current_time    : float,
    perturbed_state : np.ndarray,
    nominal_state   : np.ndarray,
  ) -> np.ndarray:
    with self._perturbed_vehicle_state(perturbed_state, nominal_state):
      self._update_models(current_time)
      return self.aerodynamic_acceleration.get_acceleration()

  def _compute_state_partial(
    self,
    current_time : float,
  ) -> np.ndarray:
    """
    Central-difference partial of the acceleration w.r.t. the vehicle state.

    Input:
    ------
      current_time : float
        Time at which the partials are to be computed [s].

    Output:
    -------
      state_partial : np.ndarray
        3x6 partial [d acc / d pos, d acc / d vel].
    """
    nominal_state = np.array(self.vehicle_state_get_function(), dtype=float)

    try:
      state_partial = compute_central_difference_jacobian(
        nominal_state = nominal_state,
        perturbations = self._body_state_perturbations,
        function      = lambda perturbed_state: self._compute_perturbed_acceleration(
          current_time, perturbed_state, nominal_state,
        ),
      )
    finally:
      # Leave the models current at the nominal state
      self._reset_models()
      self.vehicle_state_set_function(nominal_state)
      self._update_models(current_time)

    return state_partial

  def compute_acceleration_partial_wrt_current_drag_coefficient(
    self,
    acceleration_partial : np.ndarray,
  ) -> None:
    """
    Partial of the acceleration w.r.t. a constant drag coefficient.

    Input:
    ------
      acceleration_partial : np.ndarray
        3x1 array receiving the partial [m/s²].

    Output:
    -------
      None
    """
    rot_mat_aero_to_xyz = self.flight_conditions.get_rotation_aerodynamic_to_inertial()
    dynamic_pressure    = self.flight_conditions.get_current_dynamic_pressure()
    reference_area      = self.flight_conditions.get_aerodynamic_coefficient_interface().get_reference_area()
    mass                = self.aerodynamic_acceleration.get_current_mass()

    acceleration_partial[:, 0] = rot_mat_aero_to_xyz @ np.array([-1.0, 0.0, 0.0]) * dynamic_pressure * reference_area / mass
