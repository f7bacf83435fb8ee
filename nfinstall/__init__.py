"""NetFoundry Linux package installer."""

__version__ = "0.1.0"
