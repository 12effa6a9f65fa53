"""SafeRoute360 data core.

This package is organized by feature modules (fleet, auth, attendance)
on top of a small storage layer, with a container that wires repository
and services together at start-up.
"""
