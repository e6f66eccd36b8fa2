"""
Atmosphere Models
=================

Density sources for the aerodynamic acceleration.

Main Components:
----------------
1. **ExponentialAtmosphere** - Simplified exponential density model:
   rho = rho_0 * exp(-altitude / scale_height)

2. **TabulatedAtmosphere** - Table of (altitude, density, pressure, temperature)
   read once from a text file and interpolated with one monotone piecewise-cubic
   (PCHIP) interpolant per column. The interpolants preserve the monotonicity of
   the table, so no spurious density oscillations appear between rows.

Both models share the query interface
  get_density(altitude, longitude=0.0, latitude=0.0, time=0.0)
so that flight conditions can use either one.

Units:
------
- Altitude    : meters [m]
- Density     : kilograms per cubic meter [kg/m³]
- Pressure    : pascal [N/m²]
- Temperature : kelvin [K]

Table File Format:
------------------
  Whitespace-separated, four columns, one row per altitude, strictly increasing
  altitude. Lines starting with '#' are ignored.

    # altitude[m]  density[kg/m3]  pressure[Pa]  temperature[K]
    0.0            1.2250e+00      1.01325e+05   288.15
"""
import numpy  as np
import pandas as pd

from pathlib           import Path
from typing            import Optional, Union
from scipy.interpolate import PchipInterpolator

from orbit_partials.errors          import AtmosphereLookupError, InvalidConfigurationError
from orbit_partials.model.constants import SOLARSYSTEMCONSTANTS


TABLE_COLUMNS = ['altitude', 'density', 'pressure', 'temperature']


def get_default_atmosphere_table_folderpath() -> Path:
  """
  Return the folder holding the atmosphere tables shipped with the project.

  Output:
  -------
    folderpath : Path
      <project_root>/data/atmosphere_tables
  """
  # Adjust path traversal: model -> orbit_partials -> project_root
  project_root = Path(__file__).parent.parent.parent
  return project_root / 'data' / 'atmosphere_tables'


class ExponentialAtmosphere:
  """
  Simplified exponential atmospheric density model
  """

  def __init__(
    self,
    rho_0        : float = SOLARSYSTEMCONSTANTS.EARTH.RHO_0,
    scale_height : float = SOLARSYSTEMCONSTANTS.EARTH.H_0,
  ):
    """
    Initialize exponential atmosphere

    Input:
    ------
      rho_0 : float
        Density at zero altitude [kg/m³].
      scale_height : float
        Density scale height [m].

    Output:
    -------
      None
    """
    if scale_height <= 0:
      raise InvalidConfigurationError(f"Atmosphere scale height must be positive, got {scale_height}")

    self.rho_0        = rho_0
    self.scale_height = scale_height

  def get_density(
    self,
    altitude  : float,
    longitude : float = 0.0,
    latitude  : float = 0.0,
    time      : float = 0.0,
  ) -> float:
    """
    Exponential density at altitude

    Input:
    ------
      altitude : float
        Altitude above the reference surface [m]. Negative values are clamped to 0.
      longitude, latitude, time : float
        Unused, kept for a common atmosphere interface.

    Output:
    -------
      density : float
        Atmospheric density [kg/m³]
    """
    if altitude < 0:
      altitude = 0.0

    return self.rho_0 * np.exp(-altitude / self.scale_height)


class TabulatedAtmosphere:
  """
  Tabulated atmosphere (e.g. US1976) interpolated in altitude.
  """

  def __init__(
    self,
    atmosphere_table_filepath : Union[str, Path],
    allow_extrapolation       : bool = False,
  ):
    """
    Read the atmosphere table and build the interpolants.

    Input:
    ------
      atmosphere_table_filepath : str | Path
        Path to the four-column table file. A bare filename is looked up in the
        project's data/atmosphere_tables folder when it does not exist as given.
      allow_extrapolation : bool
        If True, queries outside the tabulated altitude range are extrapolated
        with the end polynomials instead of raising.

    Output:
    -------
      None

    Raises:
    -------
      FileNotFoundError
        If the table file does not exist.
      InvalidConfigurationError
        If the table is malformed.
    """
    self.atmosphere_table_filepath = self._resolve_filepath(atmosphere_table_filepath)
    self.allow_extrapolation       = allow_extrapolation

    table = self._read_table(self.atmosphere_table_filepath)

    self.altitude_data    = table['altitude'   ].to_numpy(dtype=float)
    self.density_data     = table['density'    ].to_numpy(dtype=float)
    self.pressure_data    = table['pressure'   ].to_numpy(dtype=float)
    self.temperature_data = table['temperature'].to_numpy(dtype=float)

    if np.any(np.diff(self.altitude_data) <= 0):
      raise InvalidConfigurationError(f"Atmosphere table altitudes must be strictly increasing: {self.atmosphere_table_filepath}")

    # One monotone cubic interpolant per tabulated quantity
    self._density_interpolator     = PchipInterpolator(self.altitude_data, self.density_data,     extrapolate=allow_extrapolation)
    self._pressure_interpolator    = PchipInterpolator(self.altitude_data, self.pressure_data,    extrapolate=allow_extrapolation)
    self._temperature_interpolator = PchipInterpolator(self.altitude_data, self.temperature_data, extrapolate=allow_extrapolation)

  @staticmethod
  def _resolve_filepath(
    atmosphere_table_filepath : Union[str, Path],
  ) -> Path:
    filepath = Path(atmosphere_table_filepath)
    if filepath.exists():
      return filepath

    default_filepath = get_default_atmosphere_table_folderpath() / filepath
    if default_filepath.exists():
      return default_filepath

    raise FileNotFoundError(f"Atmosphere table file not found: {filepath}")

  @staticmethod
  def _read_table(
    filepath : Path,
  ) -> pd.DataFrame:
    """
    Read the whitespace-separated atmosphere table.

    Input:
    ------
      filepath : Path
        Path to the table file.

    Output:
    -------
      table : pd.DataFrame
        Table with columns altitude, density, pressure, temperature.
    """
    try:
      table = pd.read_csv(
        filepath,
        sep     = r'\s+',
        comment = '#',
        header  = None,
      )
    except (pd.errors.EmptyDataError, pd.errors.ParserError) as error:
      raise InvalidConfigurationError(f"Atmosphere table could not be parsed: {filepath}: {error}") from error

    if table.shape[1] != len(TABLE_COLUMNS):
      raise InvalidConfigurationError(
        f"Atmosphere table must have {len(TABLE_COLUMNS)} columns ({', '.join(TABLE_COLUMNS)}), "
        f"found {table.shape[1]} in {filepath}"
      )
    if table.shape[0] < 2:
      raise InvalidConfigurationError(f"Atmosphere table must have at least two rows: {filepath}")

    table.columns = TABLE_COLUMNS
    try:
      return table.astype(float)
    except ValueError as error:
      raise InvalidConfigurationError(f"Atmosphere table must be numeric: {filepath}: {error}") from error

  def get_atmosphere_table_filepath(
    self,
  ) -> Path:
    return self.atmosphere_table_filepath

  def get_altitude_range(
    self,
  ) -> tuple:
    """
    Return (minimum, maximum) tabulated altitude [m].
    """
    return float(self.altitude_data[0]), float(self.altitude_data[-1])

  def _interpolate(
    self,
    interpolator : PchipInterpolator,
    altitude     : float,
  ) -> float:
    altitude_min, altitude_max = self.get_altitude_range()
    if not self.allow_extrapolation and not (altitude_min <= altitude <= altitude_max):
      raise AtmosphereLookupError(
        f"Altitude {altitude:.3f} m is outside the tabulated range "
        f"[{altitude_min:.3f}, {altitude_max:.3f}] m of {self.atmosphere_table_filepath.name}"
      )
    return float(interpolator(altitude))

  def get_density(
    self,
    altitude  : float,
    longitude : Optional[float] = 0.0,
    latitude  : Optional[float] = 0.0,
    time      : Optional[float] = 0.0,
  ) -> float:
    """
    Local density [kg/m³] at altitude [m]. Longitude, latitude and time are unused.
    """
    return self._interpolate(self._density_interpolator, altitude)

  def get_pressure(
    self,
    altitude  : float,
    longitude : Optional[float] = 0.0,
    latitude  : Optional[float] = 0.0,
    time      : Optional[float] = 0.0,
  ) -> float:
    """
    Local pressure [N/m²] at altitude [m]. Longitude, latitude and time are unused.
    """
    return self._interpolate(self._pressure_interpolator, altitude)

  def get_temperature(
    self,
    altitude  : float,
    longitude : Optional[float] = 0.0,
    latitude  : Optional[float] = 0.0,
    time      : Optional[float] = 0.0,
  ) -> float:
    """
    Local temperature [K] at altitude [m]. Longitude, latitude and time are unused.
    """
    return self._interpolate(self._temperature_interpolator, altitude)
