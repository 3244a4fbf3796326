"""Sea urchin configuration constants."""

# Energy
URCHIN_INITIAL_ENERGY = 50.0  # Energy of urchins seeded at reset
URCHIN_OFFSPRING_ENERGY = 30.0  # Energy of a newborn
URCHIN_ENERGY_DECAY = 0.1  # Energy lost every tick (floored at 0)
GRAZING_ENERGY_FACTOR = 0.5  # Energy gained per contact = grazing_rate * factor
GRAZING_ALGAE_FACTOR = 0.3  # Algae removed per contact = grazing_rate * factor

# Maturity (ticks); each urchin draws its own maturity time in this range
MIN_MATURITY_TIME = 54
MAX_MATURITY_TIME = 170
INITIAL_ADULT_PROBABILITY = 0.5  # Chance a seeded urchin starts as an adult

# Reproduction (broadcast spawning)
SPAWN_ENERGY_THRESHOLD = 60.0  # Parent energy must exceed this
SPAWN_ENERGY_COST = 20.0  # Energy deducted from the parent
SPAWN_COOLDOWN_TICKS = 50  # Ticks since last spawn must exceed this
OFFSPRING_JITTER = 20.0  # Offspring offset = (u - 0.5) * jitter per axis (+/-10)

# Locomotion
VELOCITY_PERTURBATION = 0.1  # Per-axis nudge = (u - 0.5) * speed * factor
MAX_SPEED_FACTOR = 2.0  # Velocity magnitude clamp = speed * factor
