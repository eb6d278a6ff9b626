"""A tank battle arcade game with a local mode and a two-player network mode."""

__version__ = "1.0.0"