"""Engine-wide constants for Starcharts."""

# --- Core ---
DEFAULT_SEED = "haunting beauty"

# --- Units ---
AU = 1.495978707e11  # metres
SOLAR_RADIUS = 6.957e8  # metres

# --- Colors (RGB) ---
BLACK = (0, 0, 0)
DEFAULT_BG_COLOR = BLACK

# --- Glyphs ---
STAR_DIM = "."
STAR_MEDIUM = "o"
STAR_BRIGHT = "*"

# --- Spectral classes (keyed by SpectralClass.value) ---
# temp in K, radius in metres, mass in solar masses
STAR_DATA: dict[str, dict] = {
    "O": {"temp": 40000, "radius": 10.0 * SOLAR_RADIUS, "mass": 20.0,
          "color": (106, 141, 255), "glyph": STAR_BRIGHT, "brightness": 1.5},
    "B": {"temp": 20000, "radius": 5.0 * SOLAR_RADIUS, "mass": 6.0,
          "color": (143, 171, 255), "glyph": STAR_BRIGHT, "brightness": 1.3},
    "A": {"temp": 8500, "radius": 1.7 * SOLAR_RADIUS, "mass": 2.0,
          "color": (221, 229, 255), "glyph": STAR_MEDIUM, "brightness": 1.1},
    "F": {"temp": 6500, "radius": 1.3 * SOLAR_RADIUS, "mass": 1.3,
          "color": (255, 255, 255), "glyph": STAR_MEDIUM, "brightness": 1.0},
    "G": {"temp": 5800, "radius": 1.0 * SOLAR_RADIUS, "mass": 1.0,
          "color": (255, 250, 205), "glyph": STAR_MEDIUM, "brightness": 0.9},
    "K": {"temp": 4500, "radius": 0.8 * SOLAR_RADIUS, "mass": 0.75,
          "color": (255, 200, 100), "glyph": STAR_DIM, "brightness": 0.7},
    "M": {"temp": 3000, "radius": 0.4 * SOLAR_RADIUS, "mass": 0.3,
          "color": (255, 154, 90), "glyph": STAR_DIM, "brightness": 0.5},
}

# Reference star for luminosity and missing-entry fallback
REFERENCE_STAR = "G"

# Weighted probabilities for spectral classes
STAR_WEIGHTS: list[tuple[str, int]] = [
    ("M", 8),
    ("K", 3),
    ("G", 2),
    ("F", 1),
    ("A", 1),
    ("B", 1),
    ("O", 1),
]

# --- Planet types (keyed by PlanetType.value) ---
# density range in g/cm3, base temp in K
PLANET_DATA: dict[str, dict] = {
    "molten": {"color": (204, 80, 0), "base_temp": 1500, "albedo": 0.08, "density": (4.0, 7.0)},
    "rock": {"color": (138, 138, 138), "base_temp": 300, "albedo": 0.25, "density": (3.0, 6.0)},
    "oceanic": {"color": (0, 80, 178), "base_temp": 280, "albedo": 0.15, "density": (2.8, 4.5)},
    "lunar": {"color": (127, 127, 127), "base_temp": 250, "albedo": 0.12, "density": (2.5, 4.0)},
    "gas_giant": {"color": (205, 133, 63), "base_temp": 150, "albedo": 0.35, "density": (0.5, 2.0)},
    "ice_giant": {"color": (51, 119, 208), "base_temp": 100, "albedo": 0.30, "density": (1.0, 2.5)},
    "frozen": {"color": (224, 232, 232), "base_temp": 50, "albedo": 0.70, "density": (1.5, 3.5)},
}

# Effective temperature zone lower bounds (K), hottest first
ZONE_HOT = 800
ZONE_OUTER_HOT = 390
ZONE_HABITABLE = 260
ZONE_COOL = 150

# Weighted planet types per climate zone (keyed by zone name)
ZONE_PLANET_WEIGHTS: dict[str, list[tuple[str, int]]] = {
    "hot": [("molten", 2), ("rock", 1)],
    "outer_hot": [("rock", 2), ("lunar", 1), ("molten", 1)],
    "habitable": [("rock", 2), ("oceanic", 2), ("lunar", 1)],
    "cool": [("rock", 1), ("frozen", 1), ("gas_giant", 1), ("ice_giant", 1), ("lunar", 1)],
    "cold": [("gas_giant", 1), ("ice_giant", 1), ("frozen", 2), ("lunar", 1)],
}

# --- System generation ---
MAX_PLANETS_PER_SYSTEM = 9
STARBASE_PROBABILITY = 0.2
STARBASE_ORBIT_DISTANCE = 1.5 * AU
SYSTEM_EDGE_RADIUS_FLOOR = 1.0 * AU
SYSTEM_EDGE_RADIUS_FACTOR = 1.5
MIN_ORBIT_SEPARATION = 0.1 * AU
MAX_ORBIT_DISTANCE = 60.0 * AU
FIRST_ORBIT_RANGE = (0.15 * AU, 0.45 * AU)
ORBIT_SCALE_RANGE = (1.5, 2.0)
ORBIT_JITTER = 0.2
ORBIT_EXTRA_RANGE = (0.01 * AU, 0.05 * AU)
FORMATION_CHANCE_BASE = 0.9
FORMATION_CHANCE_STEP = 0.03

# --- Hyperspace ---
STAR_DENSITY = 0.008  # Approximate fraction of cells holding a star
STAR_CHECK_HASH_SCALE = 10000
NEBULA_SCALE = 0.05
NEBULA_MASK_RATIO = 0.75
NEBULA_INTENSITY = 1.0
NEBULA_SPARSITY = 0.4
NEBULA_COLOURS: list[tuple[int, int, int]] = [
    (90, 0, 70),
    (0, 10, 90),
    (0, 80, 10),
]
NEBULA_CACHE_PRECISION = 2
NEBULA_CACHE_SIZE = 10000

# --- Orbits ---
SECONDS_PER_SIMULATED_YEAR = 120.0

# --- Backdrop ---
CELL_SIZE = 8
