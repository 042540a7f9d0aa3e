"""VeloType: typing-test scoring engine."""

__version__ = "0.3.0"
