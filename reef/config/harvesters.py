"""Harvester configuration constants."""

# Harvest probability per tick = harvesting_rate * factor
HARVEST_PROBABILITY_FACTOR = 0.1
