"""Command-line interface for exporting a saved itinerary."""

import argparse
import json
import sys
from pathlib import Path

from pydantic import ValidationError

from .config import configure_logging
from .export import ExportFormat, export_itinerary, save_to_directory
from .models import Itinerary


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Export a JSON itinerary as text, PDF or Word",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Plain-text export next to the input
  python -m itinerary_export trip.json

  # PDF export into a downloads folder
  python -m itinerary_export trip.json --format pdf --destination Lisbon --output-dir downloads
        """,
    )

    parser.add_argument(
        "input_file",
        type=str,
        help="Path to the itinerary JSON ({\"days\": [...], \"destination\": ...})",
    )

    parser.add_argument(
        "--format",
        choices=[fmt.value for fmt in ExportFormat],
        default=ExportFormat.TEXT.value,
        help="Output format (default: text)",
    )

    parser.add_argument(
        "--destination",
        type=str,
        help="Destination used for the title and file name (defaults to the JSON value)",
    )

    parser.add_argument(
        "--output-dir",
        type=str,
        default=".",
        metavar="DIR",
        help="Directory the export is written to",
    )

    args = parser.parse_args(argv)
    configure_logging()

    input_path = Path(args.input_file)
    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    try:
        payload = json.loads(input_path.read_text(encoding="utf-8"))
        if not isinstance(payload, dict):
            raise ValueError("expected a JSON object")
        itinerary = Itinerary.from_payload(payload)
    except (ValueError, ValidationError) as e:
        print(f"Error: Invalid itinerary: {e}", file=sys.stderr)
        return 1

    destination = args.destination or payload.get("destination")
    result, error = export_itinerary(
        itinerary, destination, args.format, save=save_to_directory(args.output_dir)
    )
    if error:
        print(f"Error: {error}", file=sys.stderr)
        return 1

    print(f"Saved {Path(args.output_dir) / result.filename}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
