"""
Exception types for the UC event simulator.

All of these are raised while validating inputs, before any simulation
work starts.
"""


class SimulationError(Exception):
    """Base class for input problems that abort a run."""
    pass


class UsageError(SimulationError):
    """Raised when required arguments are missing or unparseable."""
    pass


class ConfigurationError(SimulationError):
    """Raised when the run configuration is invalid (e.g. too many generations)."""
    pass


class InvalidTargetError(SimulationError):
    """Raised when the target sequence cannot define a reference haplotype."""
    pass
