"""
Core utilities and shared components for the TableBooking platform.

This package provides the pieces every app depends on: the shared
enumerations, the explicit read context passed into store calls, and the
exception hierarchy with its DRF handler.
"""

__version__ = "1.0.0"
