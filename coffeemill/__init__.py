"""Trajectory handling, XYZ input and output, and reweighting tools for molecular simulations."""

__version__ = "0.1.0"