import math

# === Formatting ===
REPR_PRECISION = 4  # decimals shown by repr(Vector)

# === Spherical coordinates ===
FULL_TURN = 2.0 * math.pi  # rad, range of theta drawn by random_direction()

# === Configuration Switches ===
DEBUG = False  # log zero-length inputs to unit/angle_to/to_phi_theta
