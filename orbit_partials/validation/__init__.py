"""
Validation Package
==================

Test suite for the acceleration partials.

Modules:
--------
- test_finite_difference    : Central-difference Jacobian accuracy and error cases
- test_parameters           : Parameter identifiers and the partial registry
- test_acceleration_partial : Sign convention, freshness guard and dependency checks
- test_aerodynamic_partial  : Numerical drag partials against analytical drag
- test_gravity_partial      : Analytical point mass gravity partials
- test_atmosphere           : Exponential and tabulated atmospheres
- test_configuration        : YAML configuration loading and validation
- test_main                 : Evaluation run from a configuration file

Usage:
------
Run all tests:
  python -m pytest orbit_partials/validation/ -v

Run a specific test module:
  python -m pytest orbit_partials/validation/test_aerodynamic_partial.py -v

Run a specific test class:
  python -m pytest orbit_partials/validation/test_aerodynamic_partial.py::TestDragStatePartial -v
"""
