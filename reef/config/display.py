"""World geometry and console output constants."""

# World dimensions in world units
WORLD_WIDTH = 800
WORLD_HEIGHT = 600

# Edge length of one coral grid cell
CELL_SIZE = 20

# Width of separator lines in console output
SEPARATOR_WIDTH = 60
