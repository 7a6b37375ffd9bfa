"""
Ink Digit - freehand digit input for puzzle grids.

Subpackages:
    recognizer: Geometry, templates, scoring and classification
Modules:
    gesture: Per-surface pointer capture with debounced recognition
    settings: JSON-backed user preferences
    drawing_pad, control_ui: PyQt5 host widgets
"""

__version__ = "0.1.0"
