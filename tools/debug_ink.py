"""
Diagnostic script to analyze recognizer decisions on recorded ink.

Ink files are JSON, either a bare list of strokes or an object:
    {"strokes": [[[x, y], ...], ...], "expected": 4}

Usage:
    python tools/debug_ink.py ink/*.json
    python tools/debug_ink.py --samples          # Built-in sample shapes
    python tools/debug_ink.py --samples --save   # Also write debug images
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from inkdigit.recognizer import DigitRecognizer, Ink, RecognitionResult, RecognizerConfig
from inkdigit.recognizer.debug import DEBUG_DIR, DEBUG_IMAGE_PREFIX, save_debug_image


# Built-in shapes: name -> (strokes, expected digit or None)
SAMPLE_INKS: Dict[str, Tuple[list, Optional[int]]] = {
    "circle": (
        [[(20, 0), (40, 10), (40, 30), (20, 40), (0, 30), (0, 10), (20, 0)]],
        0,
    ),
    "vertical_line": (
        [[(40, y * 10) for y in range(9)]],
        1,
    ),
    "dot": (
        [[(10, 10), (11, 10), (10, 11)]],
        None,
    ),
    "two_stroke_four": (
        [[(60, 80), (60, 0), (0, 50)], [(0, 50), (30, 50), (80, 50)]],
        4,
    ),
}


def load_ink_file(path: Path) -> Tuple[Ink, Optional[int]]:
    """Read an ink JSON file, returning the ink and the expected digit if given."""
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if isinstance(data, dict):
        return Ink.from_strokes(data["strokes"]), data.get("expected")
    return Ink.from_strokes(data), None


def analyze_ink(name: str, ink: Ink, expected: Optional[int],
                recognizer: DigitRecognizer, save: bool) -> RecognitionResult:
    """Classify one ink and print the ranked candidates."""
    print(f"\n{'='*60}")
    print(f"Analyzing: {name}")
    print(f"{'='*60}")

    result = recognizer.classify(ink)

    print(f"Strokes: {len(ink.strokes)}, points: {result.point_count}")
    if result.accepted:
        print(f"Result: {result.digit}" + (" (fast path)" if result.fast_path else ""))
    else:
        print(f"Result: no match ({result.reject_reason.value})")
    if expected is not None or result.accepted:
        status = "OK" if result.digit == expected else "MISMATCH"
        print(f"Expected: {expected} [{status}]")

    if result.candidates:
        print(f"\n{'Digit':>5} {'Score':>7} {'Dist':>7} {'Penalty':>8}")
        for cand in result.candidates:
            print(f"{cand.digit:>5} {cand.score:>7.3f} {cand.distance:>7.3f} {cand.penalty:>8.2f}")
        print(f"Gap to runner-up: {result.gap:.3f}")

    print(f"Processing time: {result.processing_time_ms:.2f}ms")

    if save:
        path = DEBUG_DIR / f"{DEBUG_IMAGE_PREFIX}{name}.png"
        save_debug_image(ink, result, str(path))
        print(f"Debug image saved: {path}")

    return result


def main() -> int:
    parser = argparse.ArgumentParser(description="Inspect recognizer scores for ink files")
    parser.add_argument("files", nargs="*", help="Ink JSON files")
    parser.add_argument("--samples", action="store_true", help="Run the built-in sample shapes")
    parser.add_argument("--save", action="store_true", help="Save annotated debug images")
    parser.add_argument("--gap", type=float, default=None, help="Override the confidence gap")
    args = parser.parse_args()

    config = RecognizerConfig() if args.gap is None else RecognizerConfig(confidence_gap=args.gap)
    recognizer = DigitRecognizer(config)

    inks: List[Tuple[str, Ink, Optional[int]]] = []
    if args.samples:
        for name, (strokes, expected) in SAMPLE_INKS.items():
            inks.append((name, Ink.from_strokes(strokes), expected))
    for file_name in args.files:
        path = Path(file_name)
        ink, expected = load_ink_file(path)
        inks.append((path.stem, ink, expected))

    if not inks:
        print("No ink to analyze. Pass JSON files or --samples.")
        return 1

    matched = 0
    labelled = 0
    for name, ink, expected in inks:
        result = analyze_ink(name, ink, expected, recognizer, args.save)
        if expected is not None:
            labelled += 1
            matched += int(result.digit == expected)

    if labelled:
        print(f"\nLabelled inks matched: {matched}/{labelled}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
