"""Scheduling and control logic for a four-channel profile-driven lamp."""

__version__ = "0.1.0"
__all__ = ["clock", "httpapi", "lamp", "temperature", "utils", "wsapi"]