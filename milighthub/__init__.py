"""MiLight gateway protocols, discovery, transitions and bulb state types."""

__version__ = "0.1.0"