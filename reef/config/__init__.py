"""Configuration package for the reef simulation.

Constants are grouped by concern (display, urchins, harvesters, corals,
simulation). Runtime-tunable values live in ``parameters.SimulationParameters``.
"""
