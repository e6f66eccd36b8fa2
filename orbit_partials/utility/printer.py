import numpy as np

from typing import List

from orbit_partials.estimation.acceleration_partial import AccelerationPartial
from orbit_partials.estimation.parameters           import EstimatableParameter


def print_state_partial(
  acceleration_partial : AccelerationPartial,
) -> None:
  """
  Print the cached 3x6 partial of one acceleration w.r.t. the accelerated body's state.

  Input:
  ------
    acceleration_partial : AccelerationPartial
      Updated acceleration partial.
  """
  state_partial = acceleration_partial.get_current_state_partial()

  print(f"    State Partial w.r.t. {acceleration_partial.accelerated_body}")
  print(f"      {'':6}{'d/dx':>20}{'d/dy':>20}{'d/dz':>20}{'d/dvx':>20}{'d/dvy':>20}{'d/dvz':>20}")
  for row_label, row in zip(('acc_x', 'acc_y', 'acc_z'), state_partial):
    print(f"      {row_label:6}" + "".join(f"{value:>20.12e}" for value in row))


def print_parameter_partials(
  acceleration_partial : AccelerationPartial,
  parameters           : List[EstimatableParameter],
) -> None:
  """
  Print the partials of one acceleration w.r.t. a list of parameters.

  Parameters the acceleration does not depend on are listed as such.

  Input:
  ------
    acceleration_partial : AccelerationPartial
      Updated acceleration partial.
    parameters : list of EstimatableParameter
      Parameters to query.
  """
  print(f"    Parameter Partials")
  for parameter in parameters:
    partial_function, column_count = acceleration_partial.get_parameter_partial_function(parameter)
    if column_count == 0:
      print(f"      {str(parameter.identifier):48} : no dependency")
      continue

    parameter_partial = np.zeros((3, column_count))
    partial_function(parameter_partial)
    for column in parameter_partial.T:
      print(f"      {str(parameter.identifier):48} : {column[0]:>19.12e}  {column[1]:>19.12e}  {column[2]:>19.12e}")


def print_results_summary(
  epoch                 : float,
  acceleration_partials : List[AccelerationPartial],
  parameters            : List[EstimatableParameter],
) -> None:
  """
  Print a summary of the evaluated acceleration partials.

  Input:
  ------
    epoch : float
      Epoch at which the partials were evaluated [s].
    acceleration_partials : list of AccelerationPartial
      Updated acceleration partials.
    parameters : list of EstimatableParameter
      Parameters to query on every acceleration partial.
  """
  print("\nResults Summary")
  print(f"  Epoch : {epoch:.6f} s")

  for acceleration_partial in acceleration_partials:
    print(f"\n  {acceleration_partial.acceleration_type} acceleration of {acceleration_partial.accelerated_body} by {acceleration_partial.accelerating_body}")
    print_state_partial(acceleration_partial)
    print_parameter_partials(acceleration_partial, parameters)
