"""
Estimation Package
==================

Acceleration partials w.r.t. body states and estimatable parameters.
"""

from .finite_difference    import compute_central_difference_jacobian
from .parameters           import EstimatableParameter, ParameterKind, ParameterPartialRegistry
from .acceleration_partial import AccelerationPartial
from .aerodynamic_partial  import AerodynamicAccelerationPartial
from .gravity_partial      import CentralGravitationalAccelerationPartial
from .partial_factory      import create_acceleration_partial, create_acceleration_partials

__all__ = [
  'compute_central_difference_jacobian',
  'EstimatableParameter',
  'ParameterKind',
  'ParameterPartialRegistry',
  'AccelerationPartial',
  'AerodynamicAccelerationPartial',
  'CentralGravitationalAccelerationPartial',
  'create_acceleration_partial',
  'create_acceleration_partials',
]
