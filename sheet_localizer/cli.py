"""Command-line interface for the sheet localizer."""

import argparse
import json
import os
import sys
from datetime import datetime

from .config import Settings
from .errors import SheetLocalizerError
from .utils import setup_logging
from .workbook import WorkbookTranslator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Sheet Localizer - Fill empty locale columns of an Excel file with translations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Translate every empty locale cell of the first sheet
  sheet-localizer strings.xlsx

  # Write the result somewhere else with another model
  sheet-localizer strings.xlsx --output-dir translated --model gpt-4o-mini

  # Check the API key and connectivity
  sheet-localizer --check

Headers of locale columns look like 1031(DEU) or 2057(ENG). The most
populated locale column is used as the source.

Environment variables:
  OPENAI_API_KEY              Required
  SHEET_LOCALIZER_MODEL       Model to use (default: gpt-4o)
  SHEET_LOCALIZER_OUTPUT_DIR  Output directory (default: output)
  SHEET_LOCALIZER_TIMEOUT     Request timeout in seconds (default: 90)
        """
    )

    parser.add_argument(
        "input_file",
        nargs="?",
        help="Input Excel file path"
    )

    parser.add_argument(
        "--check",
        action="store_true",
        help="Only test that the translation service is reachable"
    )

    parser.add_argument(
        "--output-dir", "-o",
        help="Directory for the translated workbook (default: output)"
    )

    parser.add_argument(
        "--model",
        help="Model to use for translation (default: gpt-4o)"
    )

    parser.add_argument(
        "--timeout",
        type=float,
        help="Request timeout in seconds (default: 90)"
    )

    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Hide the progress bars"
    )

    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)"
    )

    parser.add_argument(
        "--log-file",
        help="Optional log file path (default: timestamped file in the working directory)"
    )

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.check and not args.input_file:
        parser.error("input_file is required unless --check is given")

    if not args.log_file:
        args.log_file = f"sheet_localizer_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
    setup_logging(args.log_level, args.log_file)

    try:
        settings = Settings.from_env().with_overrides(
            output_dir=args.output_dir,
            model=args.model,
            timeout=args.timeout
        )
        translator = WorkbookTranslator(settings=settings, show_progress=not args.no_progress)

        if args.check:
            if translator.test_service_reachable():
                print("Configuration is OK!")
                return
            print("Translation service is not reachable")
            sys.exit(1)

        input_file = args.input_file.strip("\"'")
        if not os.path.exists(input_file):
            print(f"Error: Input file '{input_file}' does not exist")
            sys.exit(1)

        print(f"Translating {input_file}")
        result = translator.process_workbook(input_file)
    except SheetLocalizerError as e:
        print(f"Error: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nTranslation interrupted by user")
        sys.exit(1)

    print("Translation completed successfully!")
    print(f"Output saved to: {result.output_file}")
    print(json.dumps(result.stats.to_dict(), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
