"""Tripreplay - stop detection and animated playback of recorded GPS trips."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("tripreplay")
except PackageNotFoundError:
    # Fallback for development without installation
    __version__ = "0.0.0-dev"
