#!/usr/bin/env python3
# scripts/storycred_analyze.py

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
from storycred.normalize.schema import VerificationStatus
from storycred.normalize.transformer import load_stories
from storycred.votes.store import InMemoryStoryStore

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("storycred_analyze")


def main():
    parser = argparse.ArgumentParser(
        description="StoryCred Story Credibility Analyzer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Analyze every story in a seed file
  storycred_analyze.py --input data/sample_stories.yaml

  # Analyze only stories flagged as fake, writing JSON to a file
  storycred_analyze.py --input stories.json --status fake --output analysis.json
        """,
    )

    parser.add_argument(
        "--input", required=True, help="YAML or JSON file with story records"
    )
    parser.add_argument(
        "--status",
        choices=[s.value for s in VerificationStatus],
        help="Only analyze stories with this verification status",
    )
    parser.add_argument("--output", help="Write JSON here instead of stdout")
    parser.add_argument(
        "--config",
        default="config/config.yaml",
        help="Configuration file path (default: config/config.yaml)",
    )
    parser.add_argument(
        "--skip-invalid",
        action="store_true",
        help="Skip malformed story records instead of aborting",
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
        store = InMemoryStoryStore(
            load_stories(input_path, strict=not args.skip_invalid)
        )
    except (StoryCredError, OSError) as e:
        logger.error(f"Failed to load stories: {e}")
        sys.exit(1)

    engine = StoryAnalysisEngine(store, config)
    results = {
        story_id: analysis.model_dump(mode="json")
        for story_id, analysis in engine.analyze_all(args.status).items()
    }
    logger.info(f"Analyzed {len(results)} stories")

    payload = json.dumps(results, indent=2)
    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(payload, encoding="utf-8")
        logger.info(f"Analysis written to {output_path}")
    else:
        print(payload)


if __name__ == "__main__":
    main()
