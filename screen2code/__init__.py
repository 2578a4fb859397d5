"""Generate React + Material-UI, React Native or Flutter code from UI screenshots."""

__version__ = "0.1.0"
