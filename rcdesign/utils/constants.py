"""
Engineering constants for RC beam and footing design (Thai standard tables).

Units: bar diameters in mm, bar areas in cm², stresses in kg/cm².
"""

# Deformed bars: designation -> (diameter mm, area cm²)
DEFORMED_BARS = {
    "DB10": (10, 0.785),
    "DB12": (12, 1.131),
    "DB16": (16, 2.011),
    "DB20": (20, 3.142),
    "DB25": (25, 4.909),
    "DB28": (28, 6.158),
    "DB32": (32, 8.042),
}

# Round bars (stirrups)
ROUND_BARS = {
    "RB6": (6, 0.283),
    "RB9": (9, 0.636),
    "RB12": (12, 1.131),
}

# Steel grades with yield strength (fy in kg/cm²)
STEEL_GRADES = {
    "SD30": 3000,
    "SD40": 4000,
    "SD50": 5000,
}

# Concrete strengths f'c available for beams (kg/cm²)
CONCRETE_GRADES = [180, 210, 240, 280, 320, 350]

# Modulus of elasticity of steel (kg/cm²)
STEEL_MODULUS = 2_040_000

# Ec = 15100 * sqrt(f'c)
CONCRETE_MODULUS_COEFFICIENT = 15100

# Ultimate concrete strain and the 6000 kg/cm² balanced-ratio constant
CONCRETE_ULTIMATE_STRAIN = 0.003
BALANCED_STRAIN_CONSTANT = 6000

# Clear vertical spacing between bar layers (cm)
LAYER_CLEAR_SPACING = 2.5

# Working stress design
WSD_CONCRETE_STRESS_RATIO = 0.45  # fc = 0.45 f'c
WSD_STEEL_STRESS_RATIO = 0.5      # fs = 0.5 fy
WSD_SHEAR_COEFFICIENT = 0.29      # vc = 0.29 sqrt(f'c)

# Strength design
PHI_MOMENT = 0.90
PHI_SHEAR = 0.85
SDM_SHEAR_COEFFICIENT = 0.53      # vc = 0.53 sqrt(f'c)
MAX_RATIO_FACTOR = 0.75           # rho_max = 0.75 rho_b
STIRRUP_LEGS = 2

# Footings
DEAD_LOAD_FACTOR = 1.4
LIVE_LOAD_FACTOR = 1.7
FOOTING_DIMENSION_STEP = 0.2      # m
FOOTING_THICKNESS_STEP = 0.05     # m
BEAM_SHEAR_COEFFICIENT = 0.17
PUNCHING_SHEAR_COEFFICIENT = 0.53
THICKNESS_GROWTH_FACTOR = 1.15
THICKNESS_MAX_ITERATIONS = 10
RHO_MIN_HIGH_STRENGTH = 0.0020    # fy >= 4000
RHO_MIN_LOW_STRENGTH = 0.0018

# Utilization bands (%)
UTILIZATION_CAUTION = 85.0
UTILIZATION_LIMIT = 100.0

# Compression steel iteration
COMPRESSION_STEEL_MAX_ITERATIONS = 20
COMPRESSION_STEEL_TOLERANCE = 0.001  # cm on c
