"""Game-master support toolkit for running a tabletop dive campaign."""

__version__ = "0.1.0"
