"""
Finite Difference Jacobian
==========================

Central-difference Jacobian of a vector-valued function of a state vector.

For each state component i:

  column_i = ( f(x + e_i * h_i) - f(x - e_i * h_i) ) / ( 2 * h_i )

The truncation error of each column is O(h_i²); no error estimate is computed,
so accuracy is controlled only by the step sizes h_i chosen by the caller.

The function f receives a perturbed copy of the nominal state and must not rely
on any state other than its argument. Callers whose models read the state from
shared objects (e.g. an acceleration partial driving flight conditions) set,
evaluate and restore that shared state inside f, and restore the nominal state
after the last evaluation.
"""
import numpy as np

from typing import Callable

from orbit_partials.errors import InvalidConfigurationError


def validate_perturbations(
  perturbations : np.ndarray,
  state_size    : int,
) -> np.ndarray:
  """
  Validate a vector of finite-difference step sizes.

  Input:
  ------
    perturbations : array_like
      Step size per state component.
    state_size : int
      Expected number of state components.

  Output:
  -------
    perturbations : np.ndarray
      Validated float copy of the step sizes.

  Raises:
  -------
    InvalidConfigurationError
      If the vector has the wrong length, or any step is zero or not finite.
  """
  perturbations = np.array(perturbations, dtype=float).reshape(-1)

  if perturbations.size != state_size:
    raise InvalidConfigurationError(
      f"Expected {state_size} state perturbations, got {perturbations.size}"
    )
  if not np.all(np.isfinite(perturbations)):
    raise InvalidConfigurationError(f"State perturbations must be finite, got {perturbations.tolist()}")
  if np.any(perturbations == 0.0):
    zero_indices = np.flatnonzero(perturbations == 0.0).tolist()
    raise InvalidConfigurationError(f"State perturbations must be non-zero, zero at indices {zero_indices}")

  return perturbations


def compute_central_difference_jacobian(
  nominal_state : np.ndarray,
  perturbations : np.ndarray,
  function      : Callable[[np.ndarray], np.ndarray],
) -> np.ndarray:
  """
  Compute the central-difference Jacobian of function at nominal_state.

  Input:
  ------
    nominal_state : np.ndarray
      State about which the Jacobian is taken (n elements). Not modified.
    perturbations : np.ndarray
      Step size per state component (n elements, all non-zero).
    function : callable
      f(state) -> np.ndarray of m elements.

  Output:
  -------
    jacobian : np.ndarray
      m x n matrix of partial derivatives d f / d state.

  Raises:
  -------
    InvalidConfigurationError
      If the step sizes are invalid.
  """
  nominal_state = np.array(nominal_state, dtype=float).reshape(-1)
  if nominal_state.size == 0:
    raise InvalidConfigurationError("Cannot differentiate with respect to an empty state")
  perturbations = validate_perturbations(perturbations, nominal_state.size)

  jacobian = None
  for idx in range(nominal_state.size):
    # Up-perturbed evaluation
    perturbed_state       = nominal_state.copy()
    perturbed_state[idx] += perturbations[idx]
    up_perturbed_value    = np.asarray(function(perturbed_state), dtype=float).reshape(-1)

    # Down-perturbed evaluation
    perturbed_state       = nominal_state.copy()
    perturbed_state[idx] -= perturbations[idx]
    down_perturbed_value  = np.asarray(function(perturbed_state), dtype=float).reshape(-1)

    if jacobian is None:
      jacobian = np.zeros((up_perturbed_value.size, nominal_state.size))

    jacobian[:, idx] = (up_perturbed_value - down_perturbed_value) / (2.0 * perturbations[idx])

  return jacobian
