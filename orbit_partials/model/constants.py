class TIMECONSTANTS:
  """
  Time values with a reserved meaning for model caches.

  Notes:
  ------
    NAN is the not-a-time sentinel. Models recompute whenever the requested time
    differs from their cached time, and NaN never compares equal to anything
    (itself included), so resetting a cache to NAN always forces the next update.
  """
  NAN = float('nan')


# Convenience alias used throughout the estimation package
TIME_NAN = TIMECONSTANTS.NAN


class STATEINDICES:
  """
  Slices into a 6-element Cartesian state [pos, vel].
  """
  SIZE     = 6
  POSITION = slice(0, 3)
  VELOCITY = slice(3, 6)


class SOLARSYSTEMCONSTANTS:
  """
  Class to hold physical constants.
  Some constants are from "OrbitalMotion", created by Hanspeter Schaub on 6/19/05.
  """

  class EARTH:
    class RADIUS:
      EQUATOR = 6378137.0                     # Earth's WGS84 equatorial radius [m]
      POLAR   = 6356752.3                     # Earth's WGS84 polar radius [m]

    GP = 3.986004418e14                       # Earth's gravitational parameter [m³/s²]

    # Rotation rate
    OMEGA = 7.2921150e-5                      # Earth's rotation rate [rad/s]

    # Reference atmosphere parameters (simplified exponential model)
    RHO_0 = 1.225                             # Earth's sea level density [kg/m³]
    H_0   = 8500.0                            # Earth's scale height [m]

  class MOON:
    class RADIUS:
      EQUATOR = 1737400.0                     # Moon's equatorial radius [m]

    GP    = 4.9048695e12                      # Moon's gravitational parameter [m³/s²]
    OMEGA = 2.6617e-6                         # Moon's rotation rate [rad/s]

  class MARS:
    class RADIUS:
      EQUATOR = 3397200.0                     # Mars's equatorial radius [m]

    GP    = 4.28283e13                        # Mars's gravitational parameter [m³/s²]
    OMEGA = 7.088218e-5                       # Mars's rotation rate [rad/s]

    # Reference atmosphere parameters (simplified exponential model)
    RHO_0 = 0.020                             # Mars's surface density [kg/m³]
    H_0   = 11100.0                           # Mars's scale height [m]

  # Mapping from body name to constants class
  @classmethod
  def get(
    cls,
    body_name : str,
  ):
    """
    Look up the constants class of a body by name (case-insensitive).

    Input:
    ------
      body_name : str
        Body name (e.g. 'Earth', 'MARS').

    Output:
    -------
      body_constants : type
        Nested constants class (e.g. SOLARSYSTEMCONSTANTS.EARTH).
    """
    body_upper = body_name.upper()
    if hasattr(cls, body_upper):
      return getattr(cls, body_upper)

    raise ValueError(f"Unknown body name for constants lookup: {body_name}")
