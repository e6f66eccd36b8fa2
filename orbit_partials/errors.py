"""
Errors
======

Exceptions raised by the environment models and the acceleration partial engine.

- InvalidConfigurationError    : bad setup detected at construction/registration time
- UnimplementedDependencyError : dependency on a propagated state the engine cannot differentiate
- StaleStateError              : partial read before update, or after the state it was computed for changed
- AtmosphereLookupError        : tabulated atmosphere queried outside its altitude domain

A parameter with no dependency is not an error; lookups return (None, 0).
"""


class InvalidConfigurationError(ValueError):
  """
  Invalid engine configuration (perturbations, registrations, tables, input files).
  """


class UnimplementedDependencyError(NotImplementedError):
  """
  Requested dependency on a propagated state type that has no partial implementation.
  """


class StaleStateError(RuntimeError):
  """
  Cached partial is not valid for the current state.
  """


class AtmosphereLookupError(ValueError):
  """
  Altitude outside the domain of a tabulated atmosphere.
  """
