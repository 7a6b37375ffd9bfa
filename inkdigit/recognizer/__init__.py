"""
Handwriting Recognizer for Ink Digit

Classifies a freehand single digit from pointer ink.

Usage:
    from inkdigit.recognizer import recognize, Ink

    ink = Ink.from_strokes([[(20, 0), (40, 10), (40, 30), (20, 40),
                             (0, 30), (0, 10), (20, 0)]])
    digit = recognize(ink)  # 0-9, or None to ask for a redraw

Example with custom tuning:
    recognizer = DigitRecognizer(RecognizerConfig(confidence_gap=0.08))
    result = recognizer.classify(ink)
    for cand in result.candidates[:3]:
        print(cand.digit, cand.score)
"""

# Public API - Data model
from .ink import Point, Stroke, Ink

# Public API - Result types
from .result import (
    Candidate,
    RecognitionResult,
    RejectReason,
)

# Public API - Configuration
from .config import RecognizerConfig, GestureConfig

# Public API - Classifier
from .classifier import (
    DigitRecognizer,
    apply_confidence_gate,
    get_default_recognizer,
    recognize,
)

# Public API - Templates
from .templates import RAW_TEMPLATES, TemplateLibrary, get_template_library

# Debug utilities
from .debug import DEBUG_DIR, save_debug_image

__all__ = [
    # Data model
    "Point",
    "Stroke",
    "Ink",
    # Result types
    "Candidate",
    "RecognitionResult",
    "RejectReason",
    # Configuration
    "RecognizerConfig",
    "GestureConfig",
    # Classifier
    "DigitRecognizer",
    "apply_confidence_gate",
    "get_default_recognizer",
    "recognize",
    # Templates
    "RAW_TEMPLATES",
    "TemplateLibrary",
    "get_template_library",
    # Debug
    "DEBUG_DIR",
    "save_debug_image",
]
