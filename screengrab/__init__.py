"""screengrab: save a timestamped PNG of every active display."""

__version__ = "0.1.0"
