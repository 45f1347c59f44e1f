#!/usr/bin/env python3
"""
Segmentation Quality Evaluation Tool

Scores a binarized thresholding result against its grayscale original
(and optionally an external ground-truth mask) and prints the quality
metrics.

Usage:
    python evaluate_segmentation.py --original image.png --candidate result.png [--ground-truth gt.png]
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Dict, Any, List

import cv2
import numpy as np

from segmetrics.errors import MetricsError
from segmetrics.pixel_buffer import PixelBuffer
from segmetrics.metrics import MetricsConfig, compute_segmentation_metrics
from segmetrics.fidelity import compute_psnr, compute_correlation_similarity
from segmetrics.thresholding import build_histogram, select_otsu_threshold, generate_reference_mask
from segmetrics.boundary import evaluate_boundary_preservation, extract_boundary_points
from segmetrics.debug_observer import (
    DebugObserver,
    bool_to_image,
    draw_boundary_points,
    draw_caption,
    draw_edge_preservation,
)
from segmetrics.viz_constants import Color
from segmetrics.metrics_constants import DEFAULT_EDGE_THRESHOLD, SUPPORTED_IMAGE_SUFFIXES


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Evaluate a thresholding result with segmentation quality metrics.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python evaluate_segmentation.py --original scan.png --candidate otsu2d.png
    python evaluate_segmentation.py --original scan.png --candidate triclass.png --ground-truth gt.png
    python evaluate_segmentation.py --original scan.png --candidate otsu2d.png --json --fidelity
        """,
    )

    # Required arguments
    parser.add_argument(
        "--original",
        type=str,
        required=True,
        help="Path to the grayscale original image",
    )
    parser.add_argument(
        "--candidate",
        type=str,
        required=True,
        help="Path to the binarized segmentation to evaluate",
    )

    # Optional arguments
    parser.add_argument(
        "--ground-truth",
        type=str,
        default=None,
        help="Path to an external ground-truth mask (enables Hausdorff distance)",
    )
    parser.add_argument(
        "--edge-threshold",
        type=float,
        default=DEFAULT_EDGE_THRESHOLD,
        help=f"Minimum Sobel magnitude for an edge pixel (default: {DEFAULT_EDGE_THRESHOLD})",
    )
    parser.add_argument(
        "--fidelity",
        action="store_true",
        help="Also report PSNR and correlation similarity of candidate vs original",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print only the metrics as a JSON object",
    )
    parser.add_argument(
        "--debug-dir",
        type=str,
        default=None,
        help="Directory to save intermediate stages (reference mask, edges, perimeters)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging from the metrics engine",
    )

    return parser.parse_args(argv)


def validate_input(input_path: str) -> Optional[str]:
    """
    Validate input file exists and is a supported image format.

    Args:
        input_path: Path to input image

    Returns:
        Error message if validation fails, None if valid
    """
    path = Path(input_path)

    if not path.exists():
        return f"Input file not found: {input_path}"

    if not path.is_file():
        return f"Input path is not a file: {input_path}"

    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_IMAGE_SUFFIXES:
        return f"Unsupported image format: {suffix}. Use one of {', '.join(SUPPORTED_IMAGE_SUFFIXES)}."

    return None


def load_image(input_path: str) -> Optional[np.ndarray]:
    """
    Load image from file as single-channel grayscale.

    Args:
        input_path: Path to input image

    Returns:
        uint8 (height, width) array, or None if load fails
    """
    return cv2.imread(input_path, cv2.IMREAD_GRAYSCALE)


def save_debug_stages(
    observer: DebugObserver,
    original: PixelBuffer,
    candidate: PixelBuffer,
    ground_truth: Optional[PixelBuffer],
    config: MetricsConfig,
) -> None:
    """
    Save the intermediate stages of a metrics run.

    Recomputes the stage data from the same pure functions the facade uses,
    so the engine itself stays free of I/O.
    """
    threshold = select_otsu_threshold(build_histogram(original), original.pixel_count)
    reference = generate_reference_mask(original)
    observer.save_stage("01_original", original.data)
    observer.draw_and_save("02_reference_mask", reference.data, draw_caption,
                           f"Otsu reference t={threshold}")
    observer.save_stage("03_candidate", candidate.data)

    boundary = evaluate_boundary_preservation(original, candidate, config.edge_threshold)
    observer.save_stage("04_edge_map", bool_to_image(boundary["edge_map"]))
    observer.draw_and_save("05_edge_preservation", original.data, draw_edge_preservation,
                           boundary["edge_map"], boundary["preserved_map"])

    if ground_truth is not None:
        overlay = draw_boundary_points(original.data, extract_boundary_points(ground_truth),
                                       Color.TRUTH_BOUNDARY)
        overlay = draw_boundary_points(overlay, extract_boundary_points(candidate),
                                       Color.CANDIDATE_BOUNDARY)
        observer.save_stage("06_boundaries", overlay)


def evaluate(
    original_path: str,
    candidate_path: str,
    ground_truth_path: Optional[str] = None,
    edge_threshold: float = DEFAULT_EDGE_THRESHOLD,
    fidelity: bool = False,
    debug_dir: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Load the images and run the metrics engine.

    Args:
        original_path: Grayscale original image
        candidate_path: Binarized segmentation
        ground_truth_path: Optional ground-truth mask
        edge_threshold: Sobel magnitude threshold for boundary accuracy
        fidelity: Whether to include PSNR / correlation similarity
        debug_dir: Directory for intermediate stage images

    Returns:
        Output dictionary with metrics, descriptions and optional fidelity

    Raises:
        MetricsError: If an image cannot be loaded or the inputs are inconsistent
    """
    paths = {"original": original_path, "candidate": candidate_path}
    if ground_truth_path is not None:
        paths["ground_truth"] = ground_truth_path

    buffers = {}
    for name, path in paths.items():
        error = validate_input(path)
        if error:
            raise MetricsError(error)
        image = load_image(path)
        if image is None:
            raise MetricsError(f"Failed to load image: {path}")
        buffers[name] = PixelBuffer.from_array(image)

    config = MetricsConfig(edge_threshold=edge_threshold)
    metrics = compute_segmentation_metrics(
        buffers["original"],
        buffers["candidate"],
        buffers.get("ground_truth"),
        config=config,
    )

    output = {
        "metrics": metrics.to_dict(),
        "descriptions": metrics.describe(),
        "image_size": [buffers["original"].width, buffers["original"].height],
        "ground_truth_used": "ground_truth" in buffers,
    }

    if fidelity:
        output["fidelity"] = {
            "psnr_db": compute_psnr(buffers["original"], buffers["candidate"]),
            "correlation_similarity": compute_correlation_similarity(
                buffers["original"], buffers["candidate"]
            ),
        }

    if debug_dir is not None:
        observer = DebugObserver(debug_dir)
        save_debug_stages(observer, buffers["original"], buffers["candidate"],
                          buffers.get("ground_truth"), config)

    return output


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    try:
        result = evaluate(
            original_path=args.original,
            candidate_path=args.candidate,
            ground_truth_path=args.ground_truth,
            edge_threshold=args.edge_threshold,
            fidelity=args.fidelity,
            debug_dir=args.debug_dir,
        )
    except (MetricsError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        payload = dict(result["metrics"])
        if "fidelity" in result:
            payload.update(result["fidelity"])
        # inf PSNR is not valid JSON
        print(json.dumps({k: (None if np.isinf(v) else v) for k, v in payload.items()}, indent=2))
        return 0

    width, height = result["image_size"]
    print(f"Evaluated {args.candidate} against {args.original} ({width}x{height})")
    if not result["ground_truth_used"]:
        print("No ground truth supplied: Hausdorff distance not computed")

    for line in result["descriptions"].values():
        print(f"  {line}")

    if "fidelity" in result:
        print(f"  PSNR: {result['fidelity']['psnr_db']:.2f} dB")
        print(f"  Correlation similarity: {result['fidelity']['correlation_similarity']:.4f}")

    if args.debug_dir is not None:
        print(f"Debug stages saved to: {args.debug_dir}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
