"""
Orbit Partials
==============

Partial derivatives of the accelerations acting on a body w.r.t. body states
and estimatable parameters, for the variational equations of orbit
determination.

Subpackages:
------------
- model      : bodies, atmosphere, flight conditions and acceleration models
- estimation : finite differences, parameter registry and acceleration partials
- input      : YAML configuration and command line
- utility    : terminal logging and printing
- validation : test suite
"""
