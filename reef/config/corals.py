"""Coral and algae configuration constants."""

CORAL_MAX_HEALTH = 100.0
CORAL_INITIAL_ALGAE = 0.0

# Corals heal only while urchin density (urchins per grid cell) stays below this
HEALING_DENSITY_THRESHOLD = 0.5

# Algae below this level is not drawn by renderers
ALGAE_VISIBILITY_THRESHOLD = 0.1
