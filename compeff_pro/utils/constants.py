"""Physical constants and conversion factors used throughout CompEff Pro.

All values in SI units unless otherwise noted.
"""

# Universal constants
R_UNIVERSAL = 8.31446261815324  # J/(mol·K)

# Atmospheric
P_ATM = 101325.0  # Pa

# Thermodynamic
T_CELSIUS_OFFSET = 273.15  # K

# Water side of heat-pump exchangers
CP_WATER = 4186.0  # J/(kg·K)

# Conversion factors
BAR_TO_PA = 1.0e5
PA_TO_BAR = 1.0e-5
J_TO_KJ = 1.0e-3
W_TO_KW = 1.0e-3
SECONDS_PER_HOUR = 3600.0
CM3_TO_M3 = 1.0e-6
SECONDS_PER_MINUTE = 60.0

# Reference compressor used to report volumetric efficiency for polynomial models
REFERENCE_RPM = 2900.0  # rev/min
REFERENCE_DISPLACEMENT_CM3 = 437.5  # cm³/rev
