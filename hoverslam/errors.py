"""Exception types raised by hoverslam.

Configuration problems surface when a vehicle or environment is built;
step problems surface on the offending call, before any state changes.
Both subclass ValueError so callers catching the usual bad-input error
keep working.
"""


class HoverslamError(Exception):
    """Base class for all hoverslam errors."""


class InvalidConfigError(HoverslamError, ValueError):
    """A vehicle, environment or guidance configuration is physically invalid."""


class InvalidStepError(HoverslamError, ValueError):
    """A simulation step was requested with an invalid time step or command."""
