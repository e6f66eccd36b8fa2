"""
Body State Module
=================

Named containers for the Cartesian state of the bodies taking part in an
acceleration. A Body is the state accessor used by the acceleration partials:
its bound get_state/set_state methods are passed around as plain functions.

Units:
------
- Position : meters [m]
- Velocity : meters per second [m/s]
- Mass     : kilograms [kg]
"""
import numpy as np

from typing import Optional

from orbit_partials.model.constants import STATEINDICES


class Body:
  """
  Named body holding a 6-element Cartesian state and a mass
  """

  def __init__(
    self,
    name                    : str,
    state                   : Optional[np.ndarray] = None,
    mass                    : float                = 0.0,
    gravitational_parameter : float                = 0.0,
  ):
    """
    Initialize body

    Input:
    ------
      name : str
        Body identifier (e.g. 'Earth', 'Vehicle').
      state : np.ndarray | None
        Cartesian state [pos, vel] [m, m/s]. Defaults to zeros.
      mass : float
        Body mass [kg].
      gravitational_parameter : float
        Gravitational parameter [m³/s²], only used for bodies exerting gravity.

    Output:
    -------
      None
    """
    self.name                    = name
    self.mass                    = mass
    self.gravitational_parameter = gravitational_parameter
    self._state                  = np.zeros(STATEINDICES.SIZE)

    if state is not None:
      self.set_state(state)

  def get_state(
    self,
  ) -> np.ndarray:
    """
    Return a copy of the current Cartesian state [m, m/s].
    """
    return self._state.copy()

  def set_state(
    self,
    state : np.ndarray,
  ) -> None:
    """
    Overwrite the current Cartesian state.

    Input:
    ------
      state : np.ndarray
        Cartesian state [pos, vel] [m, m/s].

    Raises:
    -------
      ValueError
        If the state does not have 6 elements.
    """
    state = np.asarray(state, dtype=float)
    if state.shape != (STATEINDICES.SIZE,):
      raise ValueError(f"Body '{self.name}' state must have {STATEINDICES.SIZE} elements, got shape {state.shape}")
    self._state = state.copy()

  def get_position(
    self,
  ) -> np.ndarray:
    return self._state[STATEINDICES.POSITION].copy()

  def get_mass(
    self,
  ) -> float:
    return self.mass

  def get_gravitational_parameter(
    self,
  ) -> float:
    return self.gravitational_parameter

  def set_gravitational_parameter(
    self,
    gravitational_parameter : float,
  ) -> None:
    self.gravitational_parameter = gravitational_parameter

  def __repr__(self) -> str:
    return f"Body(name={self.name!r}, mass={self.mass}, state={self._state.tolist()})"
