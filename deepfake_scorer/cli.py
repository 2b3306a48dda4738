"""
Scoring CLI
============

Command-line interface for scoring video artifacts. Files are identified
by name and size only; their contents are never read.

Usage:
    deepfake-score video.mp4
    deepfake-score --name clip.mp4 --size 1048576
    deepfake-score --batch "videos/*.mp4" --output results.json

Examples:
    # Score a single file
    deepfake-score suspicious_video.mp4

    # Score metadata without a local file
    deepfake-score --name ai_generated_output.mp4 --size 1048576 --json

    # Batch scoring with simulated processing delay
    deepfake-score --batch "uploads/**/*.mp4" --simulate-latency --latency-scale 0.01

Exit codes:
    single artifact: 1 if flagged as deepfake, else 0
    batch: number of flagged artifacts (capped at 255)
    2: invalid input, 130: interrupted
"""

from __future__ import annotations

import argparse
import glob
import json
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence

from tqdm import tqdm

from deepfake_scorer import __version__
from deepfake_scorer.pipeline.detector import BatchEntry, VideoAnalyzer
from deepfake_scorer.pipeline.latency import SimulatedLatency
from deepfake_scorer.pipeline.result import AnalysisResult
from deepfake_scorer.utils.config import Config, get_default_config, load_config
from deepfake_scorer.utils.exceptions import (
    ConfigurationError,
    DeepfakeScorerError,
    InvalidInputError,
)
from deepfake_scorer.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)

VIDEO_EXTENSIONS = {".mp4", ".avi", ".mov", ".mkv", ".webm", ".flv", ".m4v"}

EXIT_INVALID_INPUT = 2
EXIT_INTERRUPTED = 130


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="deepfake-score",
        description="Score the deepfake likelihood of video files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    # Input
    parser.add_argument(
        "paths",
        type=str,
        nargs="*",
        help="Video files to score",
    )
    parser.add_argument(
        "--batch", "-b",
        type=str,
        nargs="+",
        help="Batch mode: paths or glob patterns for multiple videos",
    )
    parser.add_argument(
        "--name",
        type=str,
        default=None,
        help="Artifact name to score without a local file (requires --size)",
    )
    parser.add_argument(
        "--size",
        type=int,
        default=None,
        help="Artifact size in bytes (requires --name)",
    )

    # Configuration
    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to configuration file",
    )
    parser.add_argument(
        "--simulate-latency",
        action="store_true",
        help="Sleep for the modeled processing time before scoring",
    )
    parser.add_argument(
        "--latency-scale",
        type=float,
        default=None,
        help="Multiplier on the simulated delay (default: from config)",
    )
    parser.add_argument(
        "--timeout", "-t",
        type=float,
        default=None,
        help="Per-artifact timeout in seconds",
    )
    parser.add_argument(
        "--workers", "-w",
        type=int,
        default=None,
        help="Worker threads for batch mode (default: from config)",
    )

    # Output options
    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Output file for results (JSON)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Minimal output",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    args = parser.parse_args(argv)
    if (args.name is None) != (args.size is None):
        parser.error("--name and --size must be given together")
    if args.name is not None and (args.paths or args.batch):
        parser.error("--name/--size cannot be combined with video paths or --batch")
    return args


def expand_paths(patterns: List[str]) -> List[Path]:
    """Expand glob patterns to video file paths."""
    paths = []
    for pattern in patterns:
        if any(ch in pattern for ch in "*?["):
            paths.extend(Path(m) for m in glob.glob(pattern, recursive=True))
        else:
            paths.append(Path(pattern))

    paths = [p for p in paths if p.suffix.lower() in VIDEO_EXTENSIONS]
    return sorted(set(paths))


def format_result(name: str, result: AnalysisResult) -> str:
    """Format an analysis result for display."""
    filled = int(result.confidence / 5)
    bar = "=" * filled + " " * (20 - filled)
    details = result.analysis_details

    lines = [
        f"File: {name}",
        f"Result: {result.label}",
        f"Confidence: [{bar}] {result.confidence}%",
        f"Eye Blink Pattern: {details.eye_blink_pattern.value}",
        f"Lip Sync Accuracy: {details.lip_sync_accuracy:.1%}",
        f"Models: {', '.join(result.model_versions)}",
        f"Processing Time: {result.processing_time}ms",
    ]
    if result.detection_reasons:
        lines.append("Reasons:")
        lines.extend(f"  - {reason}" for reason in result.detection_reasons)
    return "\n".join(lines)


def print_summary(entries: List[BatchEntry]) -> None:
    """Print summary for batch results."""
    total = len(entries)
    scored = [e for e in entries if e.ok]
    flagged = sum(1 for e in scored if e.result.is_deepfake)
    failed = total - len(scored)
    avg_conf = sum(e.result.confidence for e in scored) / len(scored) if scored else 0

    print("\n" + "=" * 60)
    print("BATCH SUMMARY")
    print("=" * 60)
    print(f"Total Videos: {total}")
    if total:
        print(f"Deepfake: {flagged} ({flagged / total:.1%})")
        print(f"Authentic: {len(scored) - flagged} ({(len(scored) - flagged) / total:.1%})")
    print(f"Failed: {failed}")
    print(f"Average Confidence: {avg_conf:.1f}%")


def configure_logging(args: argparse.Namespace, config: Config) -> None:
    """Set up logging from config; --verbose and --quiet take precedence."""
    if args.verbose:
        level = "DEBUG"
    elif args.quiet:
        level = "WARNING"
    else:
        level = config.get("logging.level", "INFO")

    setup_logging(
        level=level,
        log_file=config.get("logging.file"),
        json_format=bool(config.get("logging.json", False)),
    )


def build_analyzer(args: argparse.Namespace, config: Config) -> VideoAnalyzer:
    latency = None
    if args.simulate_latency or args.latency_scale is not None:
        latency = SimulatedLatency(
            base_ms=config.get("latency.base_ms", 3000),
            per_mb_ms=config.get("latency.per_mb_ms", 100),
            max_ms=config.get("latency.max_ms", 8000),
            scale=(
                args.latency_scale
                if args.latency_scale is not None
                else config.get("latency.scale", 1.0)
            ),
        )

    return VideoAnalyzer(
        config=config,
        latency=latency,
        timeout=args.timeout,
        max_workers=args.workers,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        config = load_config(args.config) if args.config else get_default_config()
    except ConfigurationError as e:
        setup_logging(level="INFO")
        logger.error(f"Configuration error: {e}")
        return EXIT_INVALID_INPUT
    configure_logging(args, config)

    if args.batch:
        paths = expand_paths(args.batch + args.paths)
        if not paths:
            logger.error("No video files found matching the pattern(s)")
            return EXIT_INVALID_INPUT
        batch_mode = True
    elif len(args.paths) > 1:
        paths = [Path(p) for p in args.paths]
        batch_mode = True
    elif args.paths or args.name is not None:
        paths = [Path(p) for p in args.paths]
        batch_mode = False
    else:
        logger.error("No input specified. Provide a video path, --name/--size or --batch")
        return EXIT_INVALID_INPUT

    try:
        analyzer = build_analyzer(args, config)

        if batch_mode:
            with tqdm(total=len(paths), desc="Scoring", unit="video", disable=args.quiet) as bar:
                entries = analyzer.analyze_batch(paths, on_complete=lambda _: bar.update(1))
        elif args.name is not None:
            entries = [BatchEntry(
                name=args.name,
                size_bytes=args.size,
                result=analyzer.analyze(args.name, args.size),
            )]
        else:
            result = analyzer.analyze_path(paths[0])
            entries = [BatchEntry(name=paths[0].name, size_bytes=None, result=result)]

    except InvalidInputError as e:
        logger.error(f"Invalid input: {e.message}")
        return EXIT_INVALID_INPUT
    except DeepfakeScorerError as e:
        logger.error(f"Scoring failed: {e}")
        return 1
    except KeyboardInterrupt:
        logger.warning("Scoring interrupted by user")
        return EXIT_INTERRUPTED

    if not args.quiet:
        for entry in entries:
            if args.json:
                print(json.dumps(entry.to_dict(), indent=2))
            elif entry.ok:
                print("\n" + "-" * 40)
                print(format_result(entry.name, entry.result))
            else:
                print("\n" + "-" * 40)
                print(f"File: {entry.name}\nError: {entry.error.get('message')}")
        if batch_mode:
            print_summary(entries)

    if args.output:
        output_data = {
            "timestamp": datetime.now().isoformat(),
            "version": __version__,
            "results": [e.to_dict() for e in entries],
        }
        if batch_mode:
            output_data["summary"] = {
                "total": len(entries),
                "deepfake": sum(1 for e in entries if e.ok and e.result.is_deepfake),
                "authentic": sum(1 for e in entries if e.ok and not e.result.is_deepfake),
                "failed": sum(1 for e in entries if not e.ok),
            }
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(output_data, f, indent=2)
        if not args.quiet:
            logger.info(f"Results saved to: {args.output}")

    flagged = sum(1 for e in entries if e.ok and e.result.is_deepfake)
    if not batch_mode:
        return 1 if flagged else 0
    return min(flagged, 255)


if __name__ == "__main__":
    sys.exit(main())
