"""
Configuration
=============

Loads a YAML configuration file, fills in defaults for missing entries,
validates the values and returns a nested SimpleNamespace.

File Layout:
------------
  epoch: 0.0
  central_body:
    name: Earth
  vehicle:
    name: Vehicle
    mass: 1000.0
    state: [6778137.0, 0.0, 0.0, 0.0, 7668.56, 0.0]
    drag:
      coeff: 2.2
      area: 10.0
  atmosphere:
    model: tabulated                # tabulated | exponential
    filename: us76_sample.txt       # relative to data/atmosphere_tables
    allow_extrapolation: false
    reference_density: null         # exponential only, default from central body
    scale_height: null              # exponential only, default from central body
  partials:
    position_perturbation: 10.0
    velocity_perturbation: 0.01
    include_gravity: true
  output:
    log_filepath: null
"""
import copy
import yaml
import numpy as np

from pathlib import Path
from types   import SimpleNamespace
from typing  import Optional, Union

from orbit_partials.errors                        import InvalidConfigurationError
from orbit_partials.model.constants               import SOLARSYSTEMCONSTANTS, STATEINDICES
from orbit_partials.estimation.finite_difference  import validate_perturbations


SUPPORTED_ATMOSPHERE_MODELS = ('tabulated', 'exponential')

DEFAULT_CONFIGURATION = {
  'epoch'        : 0.0,
  'central_body' : {
    'name' : 'Earth',
  },
  'vehicle' : {
    'name'  : 'Vehicle',
    'mass'  : 1000.0,
    'state' : [6778137.0, 0.0, 0.0, 0.0, 7668.56, 0.0],
    'drag'  : {
      'coeff' : 2.2,
      'area'  : 10.0,
    },
  },
  'atmosphere' : {
    'model'               : 'tabulated',
    'filename'            : 'us76_sample.txt',
    'allow_extrapolation' : False,
    'reference_density'   : None,
    'scale_height'        : None,
  },
  'partials' : {
    'position_perturbation' : 10.0,
    'velocity_perturbation' : 1.0e-2,
    'include_gravity'       : True,
  },
  'output' : {
    'log_filepath' : None,
  },
}


def get_default_configuration_folderpath() -> Path:
  """
  Return <project_root>/data/configurations.
  """
  project_root = Path(__file__).parent.parent.parent
  return project_root / 'data' / 'configurations'


def resolve_configuration_filepath(
  config_filepath : Union[str, Path],
) -> Path:
  """
  Resolve a configuration file given as a path or as a filename in data/configurations.

  Input:
  ------
    config_filepath : str | Path
      Path to the YAML file, or its filename inside data/configurations.

  Output:
  -------
    filepath : Path
      Existing configuration file.

  Raises:
  -------
    FileNotFoundError
      If neither location holds the file.
  """
  filepath = Path(config_filepath)
  if filepath.exists():
    return filepath

  default_filepath = get_default_configuration_folderpath() / filepath.name
  if default_filepath.exists():
    return default_filepath

  raise FileNotFoundError(f"Configuration file not found: {config_filepath}")


def load_configuration_file(
  config_filepath : Union[str, Path],
) -> dict:
  """
  Read the raw YAML content of a configuration file.

  Input:
  ------
    config_filepath : str | Path
      Path to the YAML file, or its filename inside data/configurations.

  Output:
  -------
    raw_config : dict
      Parsed YAML mapping. An empty file gives an empty dict.

  Raises:
  -------
    InvalidConfigurationError
      If the file is not valid YAML or its top level is not a mapping.
  """
  filepath = resolve_configuration_filepath(config_filepath)

  with open(filepath, 'r') as f:
    try:
      raw_config = yaml.safe_load(f)
    except yaml.YAMLError as error:
      raise InvalidConfigurationError(f"Configuration file {filepath} is not valid YAML: {error}") from error

  if raw_config is None:
    return {}
  if not isinstance(raw_config, dict):
    raise InvalidConfigurationError(f"Configuration file {filepath} must contain a mapping at the top level")

  return raw_config


def merge_with_defaults(
  raw_config : dict,
  defaults   : dict = DEFAULT_CONFIGURATION,
  section    : str  = '',
) -> dict:
  """
  Recursively fill missing entries of raw_config from defaults.

  Unknown keys raise InvalidConfigurationError so that misspelled entries are
  not silently ignored.
  """
  merged = copy.deepcopy(defaults)

  for key, value in raw_config.items():
    location = f"{section}.{key}" if section else key

    if key not in defaults:
      raise InvalidConfigurationError(f"Unknown configuration entry '{location}'")

    if isinstance(defaults[key], dict):
      if value is None:
        continue
      if not isinstance(value, dict):
        raise InvalidConfigurationError(f"Configuration entry '{location}' must be a mapping, got {value!r}")
      merged[key] = merge_with_defaults(value, defaults[key], location)
    else:
      merged[key] = value

  return merged


def _as_float(
  value    : object,
  location : str,
) -> float:
  if isinstance(value, bool):
    raise InvalidConfigurationError(f"Configuration entry '{location}' must be a number, got {value!r}")
  try:
    number = float(value)
  except (TypeError, ValueError) as error:
    raise InvalidConfigurationError(f"Configuration entry '{location}' must be a number, got {value!r}") from error

  if not np.isfinite(number):
    raise InvalidConfigurationError(f"Configuration entry '{location}' must be finite, got {value!r}")
  return number


def _as_positive_float(
  value    : object,
  location : str,
) -> float:
  number = _as_float(value, location)
  if number <= 0:
    raise InvalidConfigurationError(f"Configuration entry '{location}' must be positive, got {value!r}")
  return number


def _as_bool(
  value    : object,
  location : str,
) -> bool:
  if not isinstance(value, bool):
    raise InvalidConfigurationError(f"Configuration entry '{location}' must be true or false, got {value!r}")
  return value


def build_perturbation_vector(
  position_perturbation : float,
  velocity_perturbation : float,
) -> np.ndarray:
  """
  Build the 6-element finite-difference step vector [m, m, m, m/s, m/s, m/s].

  Raises:
  -------
    InvalidConfigurationError
      If either step is zero or not finite.
  """
  perturbations = np.empty(STATEINDICES.SIZE)
  perturbations[STATEINDICES.POSITION] = position_perturbation
  perturbations[STATEINDICES.VELOCITY] = velocity_perturbation
  return validate_perturbations(perturbations, STATEINDICES.SIZE)


def build_config(
  config_filepath : Optional[Union[str, Path]] = None,
  epoch           : Optional[float]            = None,
  log_filepath    : Optional[Union[str, Path]] = None,
) -> SimpleNamespace:
  """
  Build the validated run configuration.

  Input:
  ------
    config_filepath : str | Path | None
      YAML configuration file. None uses the defaults only.
    epoch : float | None
      Overrides the epoch of the file [s].
    log_filepath : str | Path | None
      Overrides the log file of the file.

  Output:
  -------
    config : SimpleNamespace
      Nested configuration (config.vehicle.drag.coeff, config.partials.include_gravity, ...)
      plus the derived body_state_perturbations vector.

  Raises:
  -------
    InvalidConfigurationError
      If an entry is unknown, missing a valid value, or inconsistent.
  """
  raw_config = {} if config_filepath is None else load_configuration_file(config_filepath)
  merged     = merge_with_defaults(raw_config)

  if epoch is not None:
    merged['epoch'] = epoch
  if log_filepath is not None:
    merged['output']['log_filepath'] = log_filepath

  # Central body
  central_body_name = str(merged['central_body']['name'])
  try:
    central_body_constants = SOLARSYSTEMCONSTANTS.get(central_body_name)
  except ValueError as error:
    raise InvalidConfigurationError(f"Configuration entry 'central_body.name': {error}") from error

  # Vehicle
  vehicle = merged['vehicle']
  try:
    state = np.array(vehicle['state'], dtype=float)
  except (TypeError, ValueError) as error:
    raise InvalidConfigurationError(f"Configuration entry 'vehicle.state' must be a list of numbers, got {vehicle['state']!r}") from error
  if state.shape != (STATEINDICES.SIZE,):
    raise InvalidConfigurationError(f"Configuration entry 'vehicle.state' must have {STATEINDICES.SIZE} elements, got {state.size}")
  if not np.all(np.isfinite(state)):
    raise InvalidConfigurationError(f"Configuration entry 'vehicle.state' must be finite, got {state.tolist()}")

  # Atmosphere
  atmosphere = merged['atmosphere']
  atmosphere_model = str(atmosphere['model']).lower()
  if atmosphere_model not in SUPPORTED_ATMOSPHERE_MODELS:
    raise InvalidConfigurationError(
      f"Configuration entry 'atmosphere.model' must be one of {list(SUPPORTED_ATMOSPHERE_MODELS)}, got {atmosphere['model']!r}"
    )

  reference_density = atmosphere['reference_density']
  scale_height      = atmosphere['scale_height']
  if atmosphere_model == 'exponential':
    if reference_density is None:
      reference_density = getattr(central_body_constants, 'RHO_0', None)
    if scale_height is None:
      scale_height = getattr(central_body_constants, 'H_0', None)
    if reference_density is None or scale_height is None:
      raise InvalidConfigurationError(
        f"No reference atmosphere for {central_body_name}; set 'atmosphere.reference_density' and 'atmosphere.scale_height'"
      )
    reference_density = _as_positive_float(reference_density, 'atmosphere.reference_density')
    scale_height      = _as_positive_float(scale_height,      'atmosphere.scale_height'     )
  elif not atmosphere['filename']:
    raise InvalidConfigurationError("Configuration entry 'atmosphere.filename' is required for a tabulated atmosphere")

  # Partials
  partials = merged['partials']
  body_state_perturbations = build_perturbation_vector(
    _as_float(partials['position_perturbation'], 'partials.position_perturbation'),
    _as_float(partials['velocity_perturbation'], 'partials.velocity_perturbation'),
  )

  log_filepath = merged['output']['log_filepath']

  return SimpleNamespace(
    config_filepath = None if config_filepath is None else resolve_configuration_filepath(config_filepath),
    epoch           = _as_float(merged['epoch'], 'epoch'),
    central_body    = SimpleNamespace(
      name      = central_body_name,
      constants = central_body_constants,
    ),
    vehicle = SimpleNamespace(
      name  = str(vehicle['name']),
      mass  = _as_positive_float(vehicle['mass'], 'vehicle.mass'),
      state = state,
      drag  = SimpleNamespace(
        coeff = _as_float         (vehicle['drag']['coeff'], 'vehicle.drag.coeff'),
        area  = _as_positive_float(vehicle['drag']['area' ], 'vehicle.drag.area' ),
      ),
    ),
    atmosphere = SimpleNamespace(
      model               = atmosphere_model,
      filename            = atmosphere['filename'],
      allow_extrapolation = _as_bool(atmosphere['allow_extrapolation'], 'atmosphere.allow_extrapolation'),
      reference_density   = reference_density,
      scale_height        = scale_height,
    ),
    partials = SimpleNamespace(
      position_perturbation = float(body_state_perturbations[0]),
      velocity_perturbation = float(body_state_perturbations[3]),
      include_gravity       = _as_bool(partials['include_gravity'], 'partials.include_gravity'),
    ),
    body_state_perturbations = body_state_perturbations,
    log_filepath             = None if log_filepath is None else Path(log_filepath),
  )


def print_configuration(
  config : SimpleNamespace,
) -> None:
  """
  Print the configuration in a formatted table.

  Input:
  ------
    config : SimpleNamespace
      Configuration from build_config.

  Output:
  -------
    None
  """
  defaults = DEFAULT_CONFIGURATION

  # Build configuration entries: (name, value, default)
  entries = [
    ('epoch',                           config.epoch,                             defaults['epoch']),
    ('central_body.name',               config.central_body.name,                 defaults['central_body']['name']),
    ('vehicle.name',                    config.vehicle.name,                      defaults['vehicle']['name']),
    ('vehicle.mass',                    config.vehicle.mass,                      defaults['vehicle']['mass']),
    ('vehicle.drag.coeff',              config.vehicle.drag.coeff,                defaults['vehicle']['drag']['coeff']),
    ('vehicle.drag.area',               config.vehicle.drag.area,                 defaults['vehicle']['drag']['area']),
    ('atmosphere.model',                config.atmosphere.model,                  defaults['atmosphere']['model']),
    ('atmosphere.filename',             config.atmosphere.filename,               defaults['atmosphere']['filename']),
    ('atmosphere.allow_extrapolation',  config.atmosphere.allow_extrapolation,    defaults['atmosphere']['allow_extrapolation']),
    ('partials.position_perturbation',  config.partials.position_perturbation,    defaults['partials']['position_perturbation']),
    ('partials.velocity_perturbation',  config.partials.velocity_perturbation,    defaults['partials']['velocity_perturbation']),
    ('partials.include_gravity',        config.partials.include_gravity,          defaults['partials']['include_gravity']),
    ('output.log_filepath',             config.log_filepath,                      defaults['output']['log_filepath']),
  ]

  # Convert entries to strings for width calculation
  headers = ['Argument', 'Value', 'Default', 'User Set']
  rows = []
  for name, value, default in entries:
    rows.append([
      name,
      str(value) if value is not None else "None",
      str(default) if default is not None else "None",
      str(value != default),
    ])

  # Calculate column widths: max of header and all values, plus 4 for spacing
  min_spacing = 4
  col_widths = []
  for col_idx in range(len(headers)):
    max_len = len(headers[col_idx])
    for row in rows:
      max_len = max(max_len, len(row[col_idx]))
    col_widths.append(max_len + min_spacing)

  # Print table
  print("\nInput Configuration")
  if config.config_filepath is not None:
    print(f"  Configuration Filepath : {config.config_filepath}")
  header_line = "  " + "".join(h.ljust(col_widths[i]) for i, h in enumerate(headers))
  print(header_line)
  separator_line = "  " + "".join(("-" * (col_widths[i] - min_spacing)).ljust(col_widths[i]) for i in range(len(headers)))
  print(separator_line)

  for row in rows:
    row_line = "  " + "".join(row[col_idx].ljust(col_widths[col_idx]) for col_idx in range(len(row)))
    print(row_line)

  state = config.vehicle.state
  print(f"\n  Vehicle State")
  print(f"    Position : {state[0]:>19.12e}  {state[1]:>19.12e}  {state[2]:>19.12e} m")
  print(f"    Velocity : {state[3]:>19.12e}  {state[4]:>19.12e}  {state[5]:>19.12e} m/s")
