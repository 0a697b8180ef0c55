"""spinup — declarative workstation bootstrapper."""

__version__ = "0.1.0"
