"""procsnap: point-in-time Linux host metrics parsed from /proc."""

__version__ = "0.1.0"
