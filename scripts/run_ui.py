#!/usr/bin/env python3
"""Launch the PCA Point-Cloud Viewer web UI on http://localhost:8080."""

import argparse
import logging
import sys
from pathlib import Path

# Add src/ to Python path so bare imports work (project convention)
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from ui.app import main


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--port", type=int, default=8080, help="HTTP port")
    parser.add_argument(
        "--api-url", type=str, default=None,
        help="PCA analysis endpoint (overrides settings and PCA_API_URL)",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


if __name__ in {"__main__", "__mp_main__"}:
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    main(port=args.port, api_url=args.api_url)
