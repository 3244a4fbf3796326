"""Sea urchin reef ecosystem simulation.

Agents (urchins and harvesters) move over a bounded plane above a fixed
grid of coral cells. The engine advances the world one tick at a time and
the statistics sampler summarises each settled tick.
"""

__version__ = "1.0.0"
