"""Battery provider implementations."""

from pwr_notify.providers.sysfs import SysfsProvider

__all__ = ["SysfsProvider"]
