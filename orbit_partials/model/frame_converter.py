import numpy as np


class FrameConverter:
  @staticmethod
  def xyz_to_aerodynamic(
    xyz_pos_vec      : np.ndarray,
    xyz_airspeed_vec : np.ndarray,
  ) -> np.ndarray:
    """
    Calculate the rotation matrix from Inertial (XYZ) to the aerodynamic (airspeed-based) frame.

    Input:
    ------
      xyz_pos_vec : np.ndarray
        Position vector of the vehicle w.r.t. the central body in inertial frame [m].
      xyz_airspeed_vec : np.ndarray
        Velocity of the vehicle w.r.t. the co-rotating atmosphere in inertial frame [m/s].

    Output:
    -------
      rot_mat_xyz_to_aero : np.ndarray
        3x3 Rotation matrix such that: aero_vec = rot_mat_xyz_to_aero @ xyz_vec

    Notes:
    ------
      Zero bank, angle of attack and sideslip:
        x_hat : along the airspeed velocity
        y_hat : opposite to the orbit normal (r x v_air)
        z_hat : x_hat x y_hat, pointing towards the central body for level flight
      For zero airspeed, or airspeed parallel to the position vector, the frame is
      undefined and the identity is returned.

    Usage:
    ------
      rot_mat_xyz_to_aero = FrameConverter.xyz_to_aerodynamic(
        xyz_pos_vec      = xyz_pos_vec,
        xyz_airspeed_vec = xyz_airspeed_vec,
      )
    """
    airspeed_mag = np.linalg.norm(xyz_airspeed_vec)
    if airspeed_mag == 0.0:
      return np.eye(3)

    # x_hat unit vector
    x_hat = xyz_airspeed_vec / airspeed_mag

    # y_hat unit vector
    normal_vec = np.cross(xyz_pos_vec, xyz_airspeed_vec)
    normal_mag = np.linalg.norm(normal_vec)
    if normal_mag == 0.0:
      return np.eye(3)
    y_hat = -normal_vec / normal_mag

    # z_hat unit vector
    z_hat = np.cross(x_hat, y_hat)

    # Rotation matrix from inertial to aerodynamic frame
    rot_mat_xyz_to_aero = np.vstack((x_hat, y_hat, z_hat))

    # Return rotation matrix
    return rot_mat_xyz_to_aero

  @staticmethod
  def aerodynamic_to_xyz(
    xyz_pos_vec      : np.ndarray,
    xyz_airspeed_vec : np.ndarray,
  ) -> np.ndarray:
    """
    Calculate the rotation matrix from the aerodynamic frame to Inertial (XYZ).

    Input:
    ------
      xyz_pos_vec : np.ndarray
        Position vector of the vehicle w.r.t. the central body in inertial frame [m].
      xyz_airspeed_vec : np.ndarray
        Velocity of the vehicle w.r.t. the co-rotating atmosphere in inertial frame [m/s].

    Output:
    -------
      rot_mat_aero_to_xyz : np.ndarray
        3x3 Rotation matrix such that: xyz_vec = rot_mat_aero_to_xyz @ aero_vec
    """
    # Rotation matrix from aerodynamic to inertial is the transpose
    return FrameConverter.xyz_to_aerodynamic(
      xyz_pos_vec      = xyz_pos_vec,
      xyz_airspeed_vec = xyz_airspeed_vec,
    ).T
