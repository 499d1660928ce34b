"""pwr-notify: desktop notifications on critical battery levels."""

__version__ = "0.1.0"
