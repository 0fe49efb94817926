"""Evolve images from coloured shapes with a genetic algorithm."""

__version__ = "0.1.0"