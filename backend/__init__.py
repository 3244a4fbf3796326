"""Backend package for the Reef Simulation API.

This package provides the FastAPI web server and the background runner
that paces the simulation engine.
"""
