# FILE: picker_core/__init__.py
"""
picker_core package: fair player selection for drills and scrimmages.
Slotted picks, team balancing, live-drill pairing and rotation queues,
plus the record store, CSV roster I/O and dashboards around them.
"""
__version__ = "1.0.0"

__all__ = [
    "models",
    "errors",
    "fairness",
    "slots",
    "teams",
    "pairing",
    "rotation",
    "store",
    "session",
    "config",
    "io",
    "dashboard",
]
