#!/usr/bin/env python3
# scripts/extract_library.py
"""
CLI script for exporting a Steam Family game library.

Usage:
    python scripts/extract_library.py
    python scripts/extract_library.py --format json --output-dir exports
    python scripts/extract_library.py --headless --storage-state storage_state.json
"""

import sys
import os
import argparse
import locale
import logging

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

# Check Playwright availability before importing scraper
try:
    from family_library.scraper import LibraryScraper
except ImportError as e:
    if 'playwright' in str(e).lower():
        print("✗ ERROR: Playwright not installed")
        print("")
        print("Install with:")
        print("  pip install playwright")
        print("Then run:")
        print("  python -m playwright install chromium")
        print("")
        sys.exit(1)
    else:
        raise

from family_library.driver import WrongSurfaceError
from family_library.exporter import EXPORT_FORMATS, copy_to_clipboard, render, write_export
from family_library.thresholds import LIBRARY_URL


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Export your Steam Family game library to a text or JSON file',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/extract_library.py
  python scripts/extract_library.py --format json
  python scripts/extract_library.py --output-dir exports --no-clipboard
        """
    )

    parser.add_argument('--url', default=LIBRARY_URL, help='Family library page URL')
    parser.add_argument(
        '--format',
        default='text',
        choices=list(EXPORT_FORMATS),
        help='Export format (default: text)'
    )
    parser.add_argument(
        '--output-dir',
        default='.',
        help='Directory for the export file (default: current directory)'
    )
    parser.add_argument(
        '--headless',
        action='store_true',
        default=False,
        help='Run in headless mode (needs a saved, logged-in storage state)'
    )
    parser.add_argument(
        '--headed',
        dest='headless',
        action='store_false',
        help='Run in headed mode (visible browser, default)'
    )
    parser.add_argument(
        '--storage-state',
        default='storage_state.json',
        help='Path to storage state file (default: storage_state.json)'
    )
    parser.add_argument(
        '--no-clipboard',
        action='store_true',
        help='Skip copying the export to the clipboard'
    )
    parser.add_argument('--verbose', action='store_true', help='Debug logging')
    return parser


def main(argv=None) -> int:
    """Main CLI entrypoint."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Sort game names with the user's collation rules
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        logging.getLogger(__name__).debug("Keeping default collation: %s", e)

    print("\n" + "=" * 60)
    print("Steam Family Library Extractor")
    print("=" * 60)
    print(f"[BROWSER] Opening browser ({'headless' if args.headless else 'headed'} mode)...")
    print("[SCROLL] Scrolling through the page. Keep the window open.")

    scraper = LibraryScraper(headless=args.headless, storage_state_path=args.storage_state)
    try:
        report = scraper.extract(url=args.url, keep_open=not args.no_clipboard)

        payload = render(report, args.format)
        path = write_export(report, output_dir=args.output_dir, fmt=args.format)

        if not args.no_clipboard and scraper.surface is not None:
            copy_to_clipboard(payload, scraper.surface)

    except WrongSurfaceError as e:
        print("\n" + "=" * 60)
        print("✗ ERROR: No games found")
        print("=" * 60)
        print(str(e))
        print(f"Head to: {LIBRARY_URL}")
        print("")
        return 1

    except Exception as e:
        print("\n" + "=" * 60)
        print("✗ ERROR")
        print("=" * 60)
        print(str(e))
        print("")
        if "timeout" in str(e).lower():
            print("The page may have loaded slowly or Steam changed their layout.")
        return 1

    finally:
        scraper.close()

    print("\n" + "=" * 60)
    print("✓ SUCCESS")
    print("=" * 60)
    print(f"Account: {report.account}")
    print(f"Total games found: {report.total}")
    print(f"Saved to: {path}")

    if report.warnings:
        print("\nWarnings:")
        for w in report.warnings:
            print(f"  ! {w}")

    print("")
    return 0


if __name__ == '__main__':
    sys.exit(main())
