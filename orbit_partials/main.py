"""
Acceleration Partials Evaluation

Description:
  This script evaluates, at one epoch, the partial derivatives of the
  accelerations acting on a vehicle w.r.t. the vehicle's Cartesian state and
  w.r.t. estimatable parameters, as used to build the variational equations of
  an orbit determination filter.

  The evaluated accelerations are:
  - Atmospheric drag of the central body's atmosphere (numerical state partial,
    analytical drag coefficient partial)
  - Point mass gravity of the central body (analytical state and gravitational
    parameter partials, optional)

  The script performs the following steps:
  1. Loads and validates the YAML configuration.
  2. Builds the bodies, atmosphere, flight conditions and acceleration models.
  3. Creates and updates the acceleration partials at the epoch.
  4. Prints the state and parameter partials.

Usage:

  Argument          Required   Description
  ----------------  --------   --------------------------------------------------
  --config          Yes        YAML configuration file (path or name in data/configurations)
  --epoch           No         Evaluation epoch [s], overrides the configuration file
  --log-filepath    No         Copy of the terminal output, overrides the configuration file

  Example Commands:
    python -m orbit_partials.main \
      --config example_leo_drag.yaml \
      [--epoch 0.0] \
      [--log-filepath output/partials.log]
"""
from pathlib import Path
from types   import SimpleNamespace
from typing  import List, Optional, Union

from orbit_partials.model.body                  import Body
from orbit_partials.model.atmosphere            import ExponentialAtmosphere, TabulatedAtmosphere
from orbit_partials.model.aerodynamics          import AerodynamicAcceleration, AerodynamicCoefficientInterface
from orbit_partials.model.flight_conditions     import FlightConditions
from orbit_partials.model.gravity               import PointMassGravityAcceleration
from orbit_partials.estimation.parameters       import create_drag_coefficient_parameter, create_gravitational_parameter_parameter
from orbit_partials.estimation.partial_factory  import create_acceleration_partials
from orbit_partials.input.cli                   import parse_command_line_arguments
from orbit_partials.input.configuration         import build_config, print_configuration
from orbit_partials.utility.printer             import print_results_summary
from orbit_partials.utility.logger              import start_logging, stop_logging


def build_atmosphere(
  config : SimpleNamespace,
) -> object:
  """
  Create the atmosphere model selected in the configuration.

  Input:
  ------
    config : SimpleNamespace
      Configuration from build_config.

  Output:
  -------
    atmosphere : TabulatedAtmosphere | ExponentialAtmosphere
      Atmosphere model of the central body.
  """
  if config.atmosphere.model == 'exponential':
    return ExponentialAtmosphere(
      rho_0        = config.atmosphere.reference_density,
      scale_height = config.atmosphere.scale_height,
    )

  return TabulatedAtmosphere(
    atmosphere_table_filepath = config.atmosphere.filename,
    allow_extrapolation       = config.atmosphere.allow_extrapolation,
  )


def build_environment(
  config : SimpleNamespace,
) -> SimpleNamespace:
  """
  Build bodies, environment and acceleration models from the configuration.

  Input:
  ------
    config : SimpleNamespace
      Configuration from build_config.

  Output:
  -------
    environment : SimpleNamespace
      bodies, acceleration_models ({vehicle: {central body: [models]}}),
      coefficient_interface, flight_conditions and parameters.
  """
  central_body_constants = config.central_body.constants

  # Central body at rest in the origin of the inertial frame
  central_body = Body(
    name                    = config.central_body.name,
    gravitational_parameter = central_body_constants.GP,
  )
  vehicle = Body(
    name  = config.vehicle.name,
    state = config.vehicle.state,
    mass  = config.vehicle.mass,
  )

  coefficient_interface = AerodynamicCoefficientInterface(
    reference_area   = config.vehicle.drag.area,
    drag_coefficient = config.vehicle.drag.coeff,
  )
  flight_conditions = FlightConditions(
    atmosphere                        = build_atmosphere(config),
    aerodynamic_coefficient_interface = coefficient_interface,
    vehicle_state_function            = vehicle.get_state,
    central_body_state_function       = central_body.get_state,
    central_body_radius               = central_body_constants.RADIUS.EQUATOR,
    central_body_rotation_rate        = central_body_constants.OMEGA,
  )

  acceleration_models = [
    AerodynamicAcceleration(
      flight_conditions = flight_conditions,
      mass_function     = vehicle.get_mass,
    ),
  ]
  if config.partials.include_gravity:
    acceleration_models.append(
      PointMassGravityAcceleration(
        gravitational_parameter_function = central_body.get_gravitational_parameter,
        accelerated_state_function       = vehicle.get_state,
        accelerating_state_function      = central_body.get_state,
      )
    )

  parameters = [
    create_drag_coefficient_parameter(vehicle.name, coefficient_interface),
    create_gravitational_parameter_parameter(central_body),
  ]

  return SimpleNamespace(
    bodies                = {vehicle.name: vehicle, central_body.name: central_body},
    vehicle               = vehicle,
    central_body          = central_body,
    coefficient_interface = coefficient_interface,
    flight_conditions     = flight_conditions,
    acceleration_models   = {vehicle.name: {central_body.name: acceleration_models}},
    parameters            = parameters,
  )


def main(
  config_filepath : Union[str, Path],
  epoch           : Optional[float]            = None,
  log_filepath    : Optional[Union[str, Path]] = None,
) -> dict:
  """
  Main function to evaluate the acceleration partials at one epoch.

  Input:
  ------
    config_filepath : str | Path
      YAML configuration file.
    epoch : float | None
      Overrides the configured epoch [s].
    log_filepath : str | Path | None
      Overrides the configured log file.

  Output:
  -------
    result : dict
      'success', 'epoch', 'acceleration_partials' (list of AccelerationPartial),
      'parameters' (list of EstimatableParameter) and 'environment'.
  """
  # Process inputs
  config = build_config(
    config_filepath = config_filepath,
    epoch           = epoch,
    log_filepath    = log_filepath,
  )

  # Start logging to file
  logger = start_logging(
    config.log_filepath,
  )

  try:
    # Print input configuration
    print_configuration(config)

    # Build models and their partials
    environment = build_environment(config)
    acceleration_partials = create_acceleration_partials(
      acceleration_models      = environment.acceleration_models,
      bodies                   = environment.bodies,
      body_state_perturbations = config.body_state_perturbations,
    )

    # Evaluate all partials at the epoch
    for acceleration_partial in acceleration_partials:
      acceleration_partial.update(config.epoch)

    # Display results
    print_results_summary(
      epoch                 = config.epoch,
      acceleration_partials = acceleration_partials,
      parameters            = environment.parameters,
    )
  finally:
    # Stop logging
    stop_logging(logger)

  return {
    'success'               : True,
    'epoch'                 : config.epoch,
    'acceleration_partials' : acceleration_partials,
    'parameters'            : environment.parameters,
    'environment'           : environment,
  }


def run(
  argv : Optional[List[str]] = None,
) -> None:
  """
  Command-line entry point.
  """
  # Parse command-line arguments
  args = parse_command_line_arguments(argv)

  # Run main function
  main(
    args.config_filepath,
    args.epoch,
    args.log_filepath,
  )


if __name__ == "__main__":
  run()
