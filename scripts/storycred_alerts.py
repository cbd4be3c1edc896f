#!/usr/bin/env python3
# scripts/storycred_alerts.py

import argparse
import json
import logging
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from storycred.core.config import load_config
from storycred.core.engine import StoryAnalysisEngine
from storycred.errors import StoryCredError
from storycred.report.alerts import AlertSeverity
from storycred.votes.store import InMemoryStoryStore

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("storycred_alerts")


def main():
    parser = argparse.ArgumentParser(
        description="StoryCred Misinformation Alerts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List all alerts for the bundled sample stories
  storycred_alerts.py --input data/sample_stories.yaml

  # Only high-severity alerts
  storycred_alerts.py --input stories.yaml --severity high
        """,
    )

    parser.add_argument(
        "--input", required=True, help="YAML or JSON file with story records"
    )
    parser.add_argument(
        "--severity",
        choices=[s.value for s in AlertSeverity],
        help="Only show alerts of this severity",
    )
    parser.add_argument(
        "--config",
        default="config/config.yaml",
        help="Configuration file path (default: config/config.yaml)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        config = load_config(args.config)
    except Exception as e:
        logger.error(f"Failed to load configuration: {e}")
        sys.exit(1)

    input_path = Path(args.input).resolve()
    if not input_path.exists():
        logger.error(f"Input file not found: {input_path}")
        sys.exit(1)

    try:
        store = InMemoryStoryStore.from_file(input_path)
    except (StoryCredError, OSError) as e:
        logger.error(f"Failed to load stories: {e}")
        sys.exit(1)

    engine = StoryAnalysisEngine(store, config)
    alerts = engine.build_alerts(args.severity)
    print(json.dumps([alert.model_dump(mode="json") for alert in alerts], indent=2))


if __name__ == "__main__":
    main()
