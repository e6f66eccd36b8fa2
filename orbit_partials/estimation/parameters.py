"""
Estimatable Parameters and Parameter Partial Registry
=====================================================

Summary:
--------
An estimatable parameter is identified by value: its kind (e.g. constant drag
coefficient) and the body it belongs to (e.g. 'Vehicle'), plus an optional
secondary identifier. Acceleration partials register, per identifier, a
function that writes the partial of their acceleration w.r.t. that parameter
into a caller-supplied 3 x N block. The estimator looks the function up through
the registry without knowing which acceleration types exist.

Lookup results:
---------------
  (partial_function, column_count)   registered dependency, column_count = parameter size
  (None, 0)                          no dependency; a normal outcome, the estimator skips the column

Class Structure:
----------------
  ParameterKind          : scalar and vector parameter kinds
  IntegratedStateType    : propagated state types (for dependency checks)
  ParameterIdentifier    : hashable (kind, body, secondary) key
  EstimatableParameter   : identifier plus value get/set functions
  ParameterPartialEntry  : one registered partial function
  ParameterPartialRegistry
"""
import numpy as np

from dataclasses import dataclass
from enum        import Enum
from typing      import Callable, Dict, List, Optional, Tuple, Union

from orbit_partials.errors import InvalidConfigurationError


PartialFunction = Callable[[np.ndarray], None]


class ParameterKind(str, Enum):
  """
  Kinds of estimatable parameters.
  """
  CONSTANT_DRAG_COEFFICIENT           = 'constant_drag_coefficient'
  GRAVITATIONAL_PARAMETER             = 'gravitational_parameter'
  INITIAL_BODY_STATE                  = 'initial_body_state'
  EMPIRICAL_ACCELERATION_COEFFICIENTS = 'empirical_acceleration_coefficients'

  @property
  def is_vector(self) -> bool:
    return self in VECTOR_PARAMETER_KINDS


VECTOR_PARAMETER_KINDS = frozenset({
  ParameterKind.INITIAL_BODY_STATE,
  ParameterKind.EMPIRICAL_ACCELERATION_COEFFICIENTS,
})


class IntegratedStateType(str, Enum):
  """
  Types of propagated states an acceleration can depend on.
  """
  TRANSLATIONAL_STATE = 'translational_state'
  ROTATIONAL_STATE    = 'rotational_state'
  BODY_MASS_STATE     = 'body_mass_state'


@dataclass(frozen=True)
class ParameterIdentifier:
  """
  Value identity of an estimatable parameter.
  """
  kind      : ParameterKind
  body      : str
  secondary : str = ''

  def __str__(self) -> str:
    suffix = f", {self.secondary}" if self.secondary else ''
    return f"{self.kind.value} of {self.body}{suffix}"


class EstimatableParameter:
  """
  Scalar or vector quantity refined by the estimator
  """

  def __init__(
    self,
    kind               : ParameterKind,
    body               : str,
    value_get_function : Callable[[], object],
    value_set_function : Optional[Callable[[object], None]] = None,
    secondary          : str                                = '',
  ):
    """
    Initialize estimatable parameter

    Input:
    ------
      kind : ParameterKind
        Kind of parameter.
      body : str
        Name of the body the parameter belongs to.
      value_get_function : callable
        Returns the current parameter value (float or np.ndarray).
      value_set_function : callable | None
        Sets the parameter value. None for read-only parameters.
      secondary : str
        Optional secondary identifier (e.g. an arc or station name).

    Output:
    -------
      None
    """
    self.identifier         = ParameterIdentifier(ParameterKind(kind), body, secondary)
    self.value_get_function = value_get_function
    self.value_set_function = value_set_function

  @property
  def kind(self) -> ParameterKind:
    return self.identifier.kind

  @property
  def body(self) -> str:
    return self.identifier.body

  @property
  def is_vector(self) -> bool:
    return self.identifier.kind.is_vector

  @property
  def size(self) -> int:
    if not self.is_vector:
      return 1
    return int(np.asarray(self.get_value()).size)

  def get_value(self):
    return self.value_get_function()

  def set_value(
    self,
    value,
  ) -> None:
    if self.value_set_function is None:
      raise AttributeError(f"Parameter '{self.identifier}' is read-only")
    self.value_set_function(value)

  def __repr__(self) -> str:
    return f"EstimatableParameter({self.identifier})"


def create_drag_coefficient_parameter(
  body_name             : str,
  coefficient_interface : object,
) -> EstimatableParameter:
  """
  Constant drag coefficient of a body, bound to its aerodynamic coefficient interface.
  """
  return EstimatableParameter(
    kind               = ParameterKind.CONSTANT_DRAG_COEFFICIENT,
    body               = body_name,
    value_get_function = coefficient_interface.get_drag_coefficient,
    value_set_function = coefficient_interface.set_drag_coefficient,
  )


def create_gravitational_parameter_parameter(
  body : object,
) -> EstimatableParameter:
  """
  Gravitational parameter of a body, bound to the Body container.
  """
  return EstimatableParameter(
    kind               = ParameterKind.GRAVITATIONAL_PARAMETER,
    body               = body.name,
    value_get_function = body.get_gravitational_parameter,
    value_set_function = body.set_gravitational_parameter,
  )


@dataclass(frozen=True)
class ParameterPartialEntry:
  """
  Registered partial function of one acceleration w.r.t. one parameter.
  """
  identifier       : ParameterIdentifier
  column_count     : int
  partial_function : Optional[PartialFunction]

  @property
  def parameter_kind(self) -> ParameterKind:
    return self.identifier.kind

  @property
  def body(self) -> str:
    return self.identifier.body


class ParameterPartialRegistry:
  """
  Value-keyed map from parameter identifier (kind, body, secondary) to partial function
  """

  def __init__(self):
    self._entries : Dict[ParameterIdentifier, ParameterPartialEntry] = {}

  def register(
    self,
    parameter_kind   : ParameterKind,
    body             : str,
    partial_function : PartialFunction,
    column_count     : int = 1,
    secondary        : str = '',
  ) -> ParameterPartialEntry:
    """
    Register the partial function for a parameter.

    Input:
    ------
      parameter_kind : ParameterKind
        Kind of parameter.
      body : str
        Body the parameter belongs to.
      partial_function : callable
        Writes the partial into a caller-supplied 3 x column_count array.
      column_count : int
        Number of partial columns (1 for scalar parameters).
      secondary : str
        Secondary identifier the parameter must carry to match ('' for none).

    Output:
    -------
      entry : ParameterPartialEntry
        The registered entry.

    Raises:
    -------
      InvalidConfigurationError
        On a duplicate identifier, a non-callable function, or a column count
        inconsistent with the parameter kind.
    """
    identifier = ParameterIdentifier(ParameterKind(parameter_kind), body, secondary)

    if identifier in self._entries:
      raise InvalidConfigurationError(f"Duplicate partial registration for {identifier}")
    if not callable(partial_function):
      raise InvalidConfigurationError(f"Partial function for {identifier} is not callable")
    if column_count < 1:
      raise InvalidConfigurationError(
        f"Registered partial for {identifier} must have at least one column, got {column_count}"
      )
    if not identifier.kind.is_vector and column_count != 1:
      raise InvalidConfigurationError(
        f"Scalar parameter {identifier.kind.value} must have exactly one partial column, got {column_count}"
      )

    entry = ParameterPartialEntry(
      identifier       = identifier,
      column_count     = column_count,
      partial_function = partial_function,
    )
    self._entries[identifier] = entry
    return entry

  def _lookup(
    self,
    parameter : EstimatableParameter,
    vector    : bool,
  ) -> Tuple[Optional[PartialFunction], int]:
    if parameter.is_vector != vector:
      return None, 0

    entry = self._entries.get(parameter.identifier)
    if entry is None:
      return None, 0

    return entry.partial_function, entry.column_count

  def get_scalar_parameter_partial_function(
    self,
    parameter : EstimatableParameter,
  ) -> Tuple[Optional[PartialFunction], int]:
    """
    Partial function and column count (0 for no dependency) for a scalar parameter.
    """
    return self._lookup(parameter, vector=False)

  def get_vector_parameter_partial_function(
    self,
    parameter : EstimatableParameter,
  ) -> Tuple[Optional[PartialFunction], int]:
    """
    Partial function and column count (0 for no dependency) for a vector parameter.
    """
    return self._lookup(parameter, vector=True)

  def get_entries(
    self,
  ) -> List[ParameterPartialEntry]:
    return list(self._entries.values())

  def __len__(self) -> int:
    return len(self._entries)

  def __contains__(
    self,
    key : Union[ParameterIdentifier, Tuple[ParameterKind, str]],
  ) -> bool:
    if not isinstance(key, ParameterIdentifier):
      key = ParameterIdentifier(ParameterKind(key[0]), *key[1:])
    return key in self._entries
