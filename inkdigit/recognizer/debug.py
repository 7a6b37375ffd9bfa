"""
Recognizer Debug Utilities

Functions for saving annotated ink snapshots and managing debug output.
"""

import logging
from pathlib import Path
from typing import Optional

from PIL import Image, ImageDraw, ImageFont

from .geometry import get_bounds
from .ink import Ink
from .result import RecognitionResult, RejectReason


logger = logging.getLogger(__name__)

# Debug settings
DEBUG_DIR = Path("./debug")
MAX_DEBUG_IMAGES = 10
DEBUG_IMAGE_PREFIX = "ink_"

# Canvas layout
CANVAS_SIZE = 240
CANVAS_MARGIN = 20
TEXT_HEIGHT = 70
MAX_LISTED_CANDIDATES = 3


def save_debug_image(
    ink: Ink,
    result: Optional[RecognitionResult],
    path: str,
    surface_size: Optional[float] = None
) -> None:
    """
    Save an annotated snapshot of an ink attempt.

    Annotations include:
    - Each stroke in its own shade, with start dots
    - Ink bounding box
    - Recognized digit (green) or rejection reason (red)
    - Top candidates with distance and penalty

    Args:
        ink: Ink that was classified
        result: Classification result (can be None)
        path: Output file path
        surface_size: Drawing surface side in pixels; when None the ink is
                      scaled to fit the canvas
    """
    DEBUG_DIR.mkdir(parents=True, exist_ok=True)

    image = Image.new("RGB", (CANVAS_SIZE, CANVAS_SIZE + TEXT_HEIGHT), "white")
    draw = ImageDraw.Draw(image)
    font = ImageFont.load_default()

    if not ink.is_empty():
        raw = ink.to_array()
        bounds = get_bounds(raw)

        if surface_size:
            scale = (CANVAS_SIZE - 2 * CANVAS_MARGIN) / surface_size
            offset_x, offset_y = 0.0, 0.0
        else:
            span = max(bounds.width, bounds.height, 1.0)
            scale = (CANVAS_SIZE - 2 * CANVAS_MARGIN) / span
            offset_x, offset_y = bounds.min_x, bounds.min_y

        def to_canvas(x: float, y: float):
            return (
                CANVAS_MARGIN + (x - offset_x) * scale,
                CANVAS_MARGIN + (y - offset_y) * scale,
            )

        # Ink bounding box
        draw.rectangle(
            [to_canvas(bounds.min_x, bounds.min_y), to_canvas(bounds.max_x, bounds.max_y)],
            outline="lightblue"
        )

        shades = ["#4f46e5", "#0891b2", "#9333ea", "#ea580c"]
        for i, stroke in enumerate(ink.strokes):
            if not stroke.points:
                continue
            color = shades[i % len(shades)]
            coords = [to_canvas(p.x, p.y) for p in stroke.points]
            if len(coords) > 1:
                draw.line(coords, fill=color, width=3)
            sx, sy = coords[0]
            draw.ellipse([sx - 3, sy - 3, sx + 3, sy + 3], fill=color)

    text_y = CANVAS_SIZE
    if result is None:
        draw.text((10, text_y), "Not classified", fill="gray", font=font)
    else:
        if result.accepted:
            headline = f"Digit: {result.digit}" + (" (fast path)" if result.fast_path else "")
            color = "green"
        else:
            reason = result.reject_reason.value if result.reject_reason else "unknown"
            headline = f"No match: {reason}"
            color = "red"
        draw.text((10, text_y), headline, fill=color, font=font)
        draw.text(
            (10, text_y + 14),
            f"Points: {result.point_count}, Time: {result.processing_time_ms:.1f}ms",
            fill="blue", font=font
        )
        for i, cand in enumerate(result.candidates[:MAX_LISTED_CANDIDATES]):
            line = f"{cand.digit}: {cand.score:.3f} (d={cand.distance:.3f} p={cand.penalty:.2f})"
            draw.text((10, text_y + 28 + i * 12), line, fill="black", font=font)

    image.save(path, "PNG")

    _cleanup_debug_images()


def _cleanup_debug_images() -> None:
    """Remove old debug images, keeping only the most recent MAX_DEBUG_IMAGES."""
    if not DEBUG_DIR.exists():
        return

    debug_files = sorted(
        DEBUG_DIR.glob(f"{DEBUG_IMAGE_PREFIX}*.png"),
        key=lambda p: p.stat().st_mtime,
        reverse=True
    )

    for old_file in debug_files[MAX_DEBUG_IMAGES:]:
        try:
            old_file.unlink()
        except OSError as e:
            logger.warning(f"Could not remove old debug image {old_file}: {e}")


def result_color(result: Optional[RecognitionResult]) -> str:
    """
    Get color code for a classification outcome.

    Returns:
        Hex color code string
    """
    if result is None:
        return "#9e9e9e"  # Gray
    if result.accepted:
        return "#4CAF50"  # Green
    if result.reject_reason is RejectReason.AMBIGUOUS:
        return "#FFC107"  # Yellow
    return "#d32f2f"  # Red
