"""EasyTap Timer: pick a duration on a ruler, tap to count down."""

__version__ = "0.1.0"
