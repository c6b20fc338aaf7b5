"""
StoreLens - Retail Review Sentiment & PCA Analysis

CLI entry point for running the analysis pipeline.
"""

import argparse
import logging
import sys

from src.orchestrator import PipelineOrchestrator
from src.utils.errors import StoreLensError
import config.settings as settings


def setup_logging(log_level: str = "INFO"):
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(settings.LOG_FILE)
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="StoreLens - Retail Review Sentiment & PCA Analysis",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Analyse a review table with the bundled lexicon
  python main.py --input data/reviews.csv

  # Use a custom lexicon and output directory
  python main.py --input data/reviews.csv \\
                 --lexicon data/bing.csv \\
                 --output-dir output/run1

  # Demo run on synthetic reviews
  python main.py --mock
        """
    )

    parser.add_argument(
        "--input",
        default=settings.REVIEWS_CSV_PATH,
        help=f"Review table CSV (default: {settings.REVIEWS_CSV_PATH})"
    )

    parser.add_argument(
        "--lexicon",
        default=settings.LEXICON_PATH,
        help=f"Sentiment lexicon, CSV (word,sentiment) or JSON (default: {settings.LEXICON_PATH})"
    )

    parser.add_argument(
        "--output-dir",
        default=str(settings.OUTPUT_ROOT),
        help=f"Output directory (default: {settings.OUTPUT_ROOT})"
    )

    parser.add_argument(
        "--mock",
        action="store_true",
        default=settings.USE_MOCK_DATA,
        help="Generate synthetic reviews instead of reading --input"
    )

    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )
    return parser


def main(argv=None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    # Setup logging
    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    # Print banner
    print("=" * 60)
    print("StoreLens - Retail Review Sentiment & PCA Analysis")
    print("=" * 60)
    print(f"Input: {'(mock data)' if args.mock else args.input}")
    print(f"Lexicon: {args.lexicon}")
    print(f"Output: {args.output_dir}")
    print("=" * 60)
    print()

    try:
        logger.info("Initializing StoreLens pipeline...")
        orchestrator = PipelineOrchestrator(
            lexicon_path=args.lexicon,
            output_dir=args.output_dir,
            use_mock_data=args.mock
        )

        result = orchestrator.run(None if args.mock else args.input)
        paths = orchestrator.export(result)

        print()
        print("=" * 60)
        print("Explained variance")
        print("=" * 60)
        print(result.pca.variance_frame().to_string(index=False))
        print()
        print(f"Analysed {result.diagnostics['analysed_rows']} of "
              f"{result.diagnostics['input_rows']} reviews")
        for name, path in paths.items():
            print(f"{name}: {path}")
        print("=" * 60)

        logger.info("StoreLens completed successfully")
        sys.exit(0)

    except KeyboardInterrupt:
        logger.warning("Pipeline interrupted by user")
        print("\nPipeline interrupted")
        sys.exit(1)

    except StoreLensError as e:
        logger.error(f"Pipeline aborted: {e}", exc_info=True)
        print(f"\nPipeline aborted: {e}")
        sys.exit(1)

    except Exception as e:
        logger.error(f"Pipeline failed: {e}", exc_info=True)
        print(f"\nPipeline failed: {e}")
        print(f"Check {settings.LOG_FILE} for details")
        sys.exit(1)


if __name__ == "__main__":
    main()
