"""Inference CLI: analyze or annotate faces in image files."""

import argparse
import sys


def main() -> None:
    """CLI entry point for face attribute inference."""
    parser = argparse.ArgumentParser(description="Gender, age and mood estimation")
    subparsers = parser.add_subparsers(dest="command")

    # analyze
    analyze_parser = subparsers.add_parser(
        "analyze", help="Predict gender, age and mood for every face"
    )
    analyze_parser.add_argument("images", nargs="+", help="Image files to analyze")
    _add_common_arguments(analyze_parser)

    # annotate
    annotate_parser = subparsers.add_parser(
        "annotate", help="Write a copy of an image with numbered face boxes"
    )
    annotate_parser.add_argument("image", help="Image file to annotate")
    annotate_parser.add_argument("--output", "-o", required=True, help="Output image path")
    _add_common_arguments(annotate_parser)

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return

    from moodbites.log import configure_logging

    configure_logging(args.log_level)

    if args.command == "analyze":
        _cmd_analyze(args)
    elif args.command == "annotate":
        _cmd_annotate(args)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    from moodbites.config import DEVICE

    parser.add_argument(
        "--device", default=DEVICE, help=f"Device: cuda or cpu (default: {DEVICE})"
    )
    parser.add_argument(
        "--model-dir", default=None, help="Directory holding the classifier models"
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: INFO)")


def _cmd_analyze(args: argparse.Namespace) -> None:
    """Print per-face attribute lines for each image."""
    import asyncio
    from pathlib import Path

    from PIL import Image
    from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn

    from moodbites.errors import DetectionUnavailable, ModelLoadError
    from moodbites.inference.detector import InsightFaceDetector
    from moodbites.inference.pipeline import FaceAttributePipeline, describe, load_context
    from moodbites.inference.store import ModelStore

    try:
        context = load_context(ModelStore(args.model_dir), device=args.device)
    except ModelLoadError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    pipeline = FaceAttributePipeline(context, InsightFaceDetector(device=args.device))
    report: list[tuple[str, list[str]]] = []

    with Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
    ) as progress:
        task = progress.add_task("Analyzing images", total=len(args.images))

        for image_path in map(Path, args.images):
            with Image.open(image_path) as img:
                image = img.convert("RGB")
            try:
                lines = describe(asyncio.run(pipeline.analyze(image)))
            except DetectionUnavailable:
                lines = ["No result: face detection unavailable."]
            report.append((image_path.name, lines))
            progress.advance(task)

    for name, lines in report:
        print(name)
        for line in lines:
            print(f"  {line}")


def _cmd_annotate(args: argparse.Namespace) -> None:
    """Save an annotated copy of one image."""
    import asyncio

    from PIL import Image

    from moodbites.errors import DetectionUnavailable
    from moodbites.inference.annotate import annotate_faces
    from moodbites.inference.detector import InsightFaceDetector
    from moodbites.inference.pipeline import detect_faces

    with Image.open(args.image) as img:
        image = img.convert("RGB")

    # Annotation needs no classifier models, only the detector
    detector = InsightFaceDetector(device=args.device)
    try:
        boxes = asyncio.run(detect_faces(detector, image))
    except DetectionUnavailable:
        print("No result: face detection unavailable.")
        return

    annotate_faces(image, boxes).save(args.output)
    print(f"Faces: {len(boxes)}")
    print(f"Saved: {args.output}")
