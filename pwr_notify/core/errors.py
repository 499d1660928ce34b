"""Error types raised while reading and combining battery state.

Read and aggregation errors are recoverable: the monitor turns them into a
failure notification and tries again on the next cycle. ``str(error)`` is
the text shown to the user.
"""


class PowerSupplyError(Exception):
    """Base class for everything that can go wrong during a poll cycle."""


class ReadError(PowerSupplyError):
    """A battery attribute could not be obtained."""

    def __init__(self, battery: str, attribute: str, message: str):
        super().__init__(message)
        self.battery = battery
        self.attribute = attribute


class AttributeReadError(ReadError):
    """The attribute file is missing or unreadable."""

    def __init__(self, battery: str, attribute: str, path, reason: str):
        super().__init__(battery, attribute, f"Cannot read {path}: {reason}")
        self.path = path


class AttributeParseError(ReadError):
    """The attribute file does not hold a non-negative integer."""

    def __init__(self, battery: str, attribute: str, content: str):
        super().__init__(
            battery, attribute,
            f"Invalid {attribute} value for {battery}: {content!r}",
        )
        self.content = content


class AggregationError(PowerSupplyError):
    """Per-battery readings cannot be combined into one percentage."""


class ZeroCapacityError(AggregationError):
    def __init__(self):
        super().__init__("Total full energy is zero")


class ConfigError(ValueError):
    """Invalid configuration value. Only raised at startup."""
