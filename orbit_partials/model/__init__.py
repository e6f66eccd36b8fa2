"""
Model Package
=============

Bodies, environment and acceleration models driven by the acceleration partials.
"""

from .body              import Body
from .atmosphere        import ExponentialAtmosphere, TabulatedAtmosphere
from .aerodynamics      import AerodynamicAcceleration, AerodynamicCoefficientInterface
from .flight_conditions import FlightConditions
from .gravity           import PointMassGravityAcceleration

__all__ = [
  'Body',
  'ExponentialAtmosphere',
  'TabulatedAtmosphere',
  'AerodynamicAcceleration',
  'AerodynamicCoefficientInterface',
  'FlightConditions',
  'PointMassGravityAcceleration',
]
