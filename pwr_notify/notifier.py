"""Desktop notifications via the freedesktop notification service.

Two backends:
- dbus: calls org.freedesktop.Notifications.Notify on the session bus
- notify-send: runs the libnotify command line tool

Delivery failures are logged and reported through the return value of
``send``; they never raise.
"""

import logging
import subprocess
from typing import Optional

log = logging.getLogger(__name__)

_NOTIFY_BUS = "org.freedesktop.Notifications"
_NOTIFY_PATH = "/org/freedesktop/Notifications"
_NOTIFY_IFACE = "org.freedesktop.Notifications"

BACKENDS = ("dbus", "notify-send")


def _try_import_dbus():
    """Import dbus lazily so the module is loadable even without dbus-python."""
    try:
        import dbus
        return dbus
    except ImportError:
        return None


class Notifier:
    """Sends desktop notifications through the configured backend."""

    def __init__(self, app_name: str = "pwr-notify", icon: str = "battery",
                 backend: str = "notify-send"):
        if backend not in BACKENDS:
            raise ValueError(f"Unknown notification backend: {backend!r}")
        self.app_name = app_name
        self.icon = icon
        self.backend = backend
        self._iface = None

    def send(self, summary: str, body: str, timeout: int,
             icon: Optional[str] = None) -> bool:
        """Show a notification. ``timeout`` is in seconds, 0 keeps it until dismissed.

        Returns True if the notification was handed to the notification service.
        """
        icon = icon or self.icon
        expire_ms = max(0, int(timeout)) * 1000
        if self.backend == "dbus":
            return self._send_dbus(summary, body, expire_ms, icon)
        return self._send_notify_send(summary, body, expire_ms, icon)

    # ---- dbus ------------------------------------------------------------

    def _get_iface(self, dbus):
        if self._iface is None:
            bus = dbus.SessionBus()
            obj = bus.get_object(_NOTIFY_BUS, _NOTIFY_PATH)
            self._iface = dbus.Interface(obj, _NOTIFY_IFACE)
        return self._iface

    def _send_dbus(self, summary: str, body: str, expire_ms: int, icon: str) -> bool:
        dbus = _try_import_dbus()
        if dbus is None:
            log.warning("Notification not sent, dbus-python is not installed: %s", summary)
            return False

        try:
            iface = self._get_iface(dbus)
            iface.Notify(
                self.app_name,
                dbus.UInt32(0),
                icon,
                summary,
                body,
                dbus.Array([], signature="s"),
                dbus.Dictionary({}, signature="sv"),
                dbus.Int32(expire_ms),
            )
        except dbus.exceptions.DBusException as e:
            # Drop the cached proxy, the notification daemon may have restarted.
            self._iface = None
            log.warning("Notification %r failed: %s", summary, e)
            return False
        return True

    # ---- notify-send -----------------------------------------------------

    def _send_notify_send(self, summary: str, body: str, expire_ms: int, icon: str) -> bool:
        try:
            result = subprocess.run([
                "notify-send",
                "-a", self.app_name,
                "-i", icon,
                "-t", str(expire_ms),
                summary,
                body,
            ], check=False, capture_output=True, text=True, timeout=10)
        except (OSError, subprocess.SubprocessError) as e:
            log.warning("Notification %r failed: %s", summary, e)
            return False

        if result.returncode != 0:
            log.warning(
                "Notification %r failed: notify-send exited with %d: %s",
                summary, result.returncode, result.stderr.strip(),
            )
            return False
        return True
