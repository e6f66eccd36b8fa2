"""
Acceleration Partial Base
=========================

Summary:
--------
An AccelerationPartial belongs to one acceleration model acting between a body
undergoing acceleration and a body exerting it. update(time) computes and caches
the 3x6 partial of the acceleration w.r.t. the Cartesian state of the
accelerated body; the wrt_* accessors then add that cached block (or its
negative) into a caller-owned matrix without recomputation.

State Machine:
--------------
  Uninitialized --update(t)--> Updated(t) --update(t')--> Updated(t') ...

Sign Convention:
----------------
  accelerated body  : +block
  accelerating body : -block   (the acceleration depends on the relative state only)
  add_contribution=False flips the sign of either.

Freshness:
----------
Accessors and parameter partial functions raise StaleStateError when called
before the first update, after an update that raised, or when any state or
model parameter the partial depends on has changed since the last update.

Class Structure:
----------------
  AccelerationPartial (abstract)
  ├── AerodynamicAccelerationPartial          (numerical state partial)
  └── CentralGravitationalAccelerationPartial (analytical state partial)
"""
import numpy as np

from abc    import ABC, abstractmethod
from typing import Callable, List, Optional, Sequence, Tuple

from orbit_partials.errors               import StaleStateError, UnimplementedDependencyError
from orbit_partials.model.constants      import TIME_NAN, STATEINDICES
from orbit_partials.estimation.parameters import (
  EstimatableParameter,
  IntegratedStateType,
  ParameterKind,
  ParameterPartialRegistry,
  PartialFunction,
)


class AccelerationPartial(ABC):
  """
  Partials of one acceleration w.r.t. body states and estimatable parameters
  """

  def __init__(
    self,
    accelerated_body          : str,
    accelerating_body         : str,
    acceleration_type         : str,
    dependent_state_functions     : Sequence[Callable[[], np.ndarray]] = (),
    dependent_parameter_functions : Sequence[Callable[[], object]]     = (),
  ):
    """
    Initialize acceleration partial

    Input:
    ------
      accelerated_body : str
        Name of the body undergoing acceleration.
      accelerating_body : str
        Name of the body exerting acceleration.
      acceleration_type : str
        Label of the acceleration model (e.g. 'aerodynamic').
      dependent_state_functions : sequence of callable
        Functions returning the states the partial is computed from. Their values
        are recorded at each update and compared on every read.
      dependent_parameter_functions : sequence of callable
        Functions returning the model parameters (scalars or arrays) the partial
        is computed from, e.g. drag coefficient, reference area, mass or
        gravitational parameter. Recorded and compared like the states.

    Output:
    -------
      None
    """
    self._accelerated_body              = accelerated_body
    self._accelerating_body             = accelerating_body
    self.acceleration_type              = acceleration_type
    self._dependent_state_functions     = list(dependent_state_functions)
    self._dependent_parameter_functions = list(dependent_parameter_functions)

    self.current_time                    = TIME_NAN
    self._is_updated                     = False
    self._current_state_partial          = np.zeros((3, STATEINDICES.SIZE))
    self._dependent_states_at_update     : Optional[List[np.ndarray]] = None
    self._dependent_parameters_at_update : Optional[List[np.ndarray]] = None

    self._parameter_partial_registry = ParameterPartialRegistry()

  @property
  def accelerated_body(self) -> str:
    return self._accelerated_body

  @property
  def accelerating_body(self) -> str:
    return self._accelerating_body

  @property
  def parameter_partial_registry(self) -> ParameterPartialRegistry:
    return self._parameter_partial_registry

  @property
  def is_updated(self) -> bool:
    return self._is_updated

  # ---------------------------------------------------------------------------
  # Update cycle
  # ---------------------------------------------------------------------------

  @abstractmethod
  def _compute_state_partial(
    self,
    current_time : float,
  ) -> np.ndarray:
    """
    Compute the 3x6 partial w.r.t. the accelerated body's state at current_time.
    Implementations leave every model they drive current at the nominal state.
    """

  def update(
    self,
    current_time : float = TIME_NAN,
  ) -> None:
    """
    Recompute and cache the state partial for current_time.

    Input:
    ------
      current_time : float
        Time at which the partials are to be computed [s].

    Output:
    -------
      None

    Notes:
    ------
      The previous cache is invalidated before computing, so if the computation
      raises, every accessor raises StaleStateError until the next successful update.
    """
    self._is_updated                     = False
    self._dependent_states_at_update     = None
    self._dependent_parameters_at_update = None
    self.current_time                    = TIME_NAN

    state_partial = np.asarray(self._compute_state_partial(current_time), dtype=float)
    if state_partial.shape != (3, STATEINDICES.SIZE):
      raise ValueError(f"State partial must be 3x{STATEINDICES.SIZE}, got shape {state_partial.shape}")

    self._current_state_partial          = state_partial
    self._dependent_states_at_update     = self._get_dependent_states()
    self._dependent_parameters_at_update = self._get_dependent_parameters()
    self.current_time                    = current_time
    self._is_updated                     = True

  def _get_dependent_states(
    self,
  ) -> List[np.ndarray]:
    return [np.array(state_function(), dtype=float) for state_function in self._dependent_state_functions]

  def _get_dependent_parameters(
    self,
  ) -> List[np.ndarray]:
    return [np.array(parameter_function(), dtype=float) for parameter_function in self._dependent_parameter_functions]

  def check_partial_is_current(
    self,
  ) -> None:
    """
    Raise StaleStateError unless the cached partial matches the current states and parameters.
    """
    description = f"{self.acceleration_type} partial of {self._accelerated_body} w.r.t. {self._accelerating_body}"

    if not self._is_updated:
      raise StaleStateError(f"{description} read without a successful update()")

    current_states = self._get_dependent_states()
    for state_at_update, current_state in zip(self._dependent_states_at_update, current_states):
      if not np.array_equal(state_at_update, current_state):
        raise StaleStateError(f"{description} is stale: state changed since update at time {self.current_time}")

    current_parameters = self._get_dependent_parameters()
    for parameter_at_update, current_parameter in zip(self._dependent_parameters_at_update, current_parameters):
      if not np.array_equal(parameter_at_update, current_parameter):
        raise StaleStateError(f"{description} is stale: model parameter changed since update at time {self.current_time}")

  def get_current_state_partial(
    self,
  ) -> np.ndarray:
    """
    Copy of the cached 3x6 partial w.r.t. the accelerated body's state.
    """
    self.check_partial_is_current()
    return self._current_state_partial.copy()

  # ---------------------------------------------------------------------------
  # State partial accessors
  # ---------------------------------------------------------------------------

  def _add_block(
    self,
    partial_matrix   : np.ndarray,
    block            : np.ndarray,
    sign             : float,
    add_contribution : bool,
    start_row        : int,
    start_column     : int,
  ) -> None:
    self.check_partial_is_current()

    n_rows, n_cols = block.shape
    if start_row < 0 or start_column < 0 or \
       start_row + n_rows > partial_matrix.shape[0] or start_column + n_cols > partial_matrix.shape[1]:
      raise ValueError(
        f"Partial block of shape {block.shape} at ({start_row}, {start_column}) "
        f"does not fit in matrix of shape {partial_matrix.shape}"
      )

    if not add_contribution:
      sign = -sign

    partial_matrix[start_row:start_row + n_rows, start_column:start_column + n_cols] += sign * block

  def wrt_position_of_accelerated_body(
    self,
    partial_matrix   : np.ndarray,
    add_contribution : bool = True,
    start_row        : int  = 0,
    start_column     : int  = 0,
  ) -> None:
    """
    Add the partial w.r.t. the position of the body undergoing acceleration.

    Input:
    ------
      partial_matrix : np.ndarray
        Matrix into which the 3x3 block is added in place.
      add_contribution : bool
        True adds the partial itself, False adds its negative.
      start_row : int
        First row of the block in partial_matrix.
      start_column : int
        First column of the block in partial_matrix.

    Output:
    -------
      None
    """
    self._add_block(partial_matrix, self._current_state_partial[:, STATEINDICES.POSITION], 1.0, add_contribution, start_row, start_column)

  def wrt_velocity_of_accelerated_body(
    self,
    partial_matrix   : np.ndarray,
    add_contribution : bool = True,
    start_row        : int  = 0,
    start_column     : int  = 0,
  ) -> None:
    """
    Add the partial w.r.t. the velocity of the body undergoing acceleration.
    """
    self._add_block(partial_matrix, self._current_state_partial[:, STATEINDICES.VELOCITY], 1.0, add_contribution, start_row, start_column)

  def wrt_position_of_accelerating_body(
    self,
    partial_matrix   : np.ndarray,
    add_contribution : bool = True,
    start_row        : int  = 0,
    start_column     : int  = 0,
  ) -> None:
    """
    Add the partial w.r.t. the position of the body exerting acceleration (negated block).
    """
    self._add_block(partial_matrix, self._current_state_partial[:, STATEINDICES.POSITION], -1.0, add_contribution, start_row, start_column)

  def wrt_velocity_of_accelerating_body(
    self,
    partial_matrix   : np.ndarray,
    add_contribution : bool = True,
    start_row        : int  = 0,
    start_column     : int  = 0,
  ) -> None:
    """
    Add the partial w.r.t. the velocity of the body exerting acceleration (negated block).
    """
    self._add_block(partial_matrix, self._current_state_partial[:, STATEINDICES.VELOCITY], -1.0, add_contribution, start_row, start_column)

  # ---------------------------------------------------------------------------
  # Dependencies
  # ---------------------------------------------------------------------------

  def is_dependent_on_non_translational_state(
    self,
    state_reference_point : Tuple[str, str],
    state_type            : IntegratedStateType,
  ) -> bool:
    """
    Determine whether the acceleration depends on a propagated non-translational state.

    Input:
    ------
      state_reference_point : tuple(str, str)
        (body, reference point) of the propagated state.
      state_type : IntegratedStateType
        Type of the propagated state.

    Output:
    -------
      is_dependent : bool
        Always False for supported state types.

    Raises:
    -------
      UnimplementedDependencyError
        If a body mass state of the accelerated or accelerating body is requested.
    """
    state_type = IntegratedStateType(state_type)
    body_name  = state_reference_point[0]

    if state_type == IntegratedStateType.BODY_MASS_STATE and \
       body_name in (self._accelerated_body, self._accelerating_body):
      raise UnimplementedDependencyError(
        f"Dependency of {self.acceleration_type} acceleration on the mass of {body_name} is not implemented"
      )
    return False

  # ---------------------------------------------------------------------------
  # Parameter partials
  # ---------------------------------------------------------------------------

  def _register_parameter_partial(
    self,
    parameter_kind   : ParameterKind,
    body             : str,
    partial_function : PartialFunction,
    column_count     : int = 1,
  ) -> None:
    def checked_partial_function(
      acceleration_partial : np.ndarray,
    ) -> None:
      self.check_partial_is_current()
      partial_function(acceleration_partial)

    self._parameter_partial_registry.register(
      parameter_kind   = parameter_kind,
      body             = body,
      partial_function = checked_partial_function,
      column_count     = column_count,
    )

  def get_parameter_partial_function(
    self,
    parameter : EstimatableParameter,
  ) -> Tuple[Optional[PartialFunction], int]:
    """
    Retrieve the function returning the partial w.r.t. a parameter.

    Input:
    ------
      parameter : EstimatableParameter
        Parameter w.r.t. which the partial is taken.

    Output:
    -------
      partial_function : callable | None
        Writes the partial into a 3 x column_count array. None if no dependency.
      column_count : int
        Number of partial columns; 0 for no dependency.
    """
    if parameter.is_vector:
      return self._parameter_partial_registry.get_vector_parameter_partial_function(parameter)
    return self._parameter_partial_registry.get_scalar_parameter_partial_function(parameter)

  def __repr__(self) -> str:
    return (
      f"{type(self).__name__}(accelerated_body={self._accelerated_body!r}, "
      f"accelerating_body={self._accelerating_body!r}, current_time={self.current_time})"
    )
