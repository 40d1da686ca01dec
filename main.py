#!/usr/bin/env python3
"""
NF-e Line-Item Report - Main Entry Point.

Reads every NF-e XML document in the input folder and writes its product
and service lines, classified as Consumível or Patrimonial, to an Excel
report.

Usage:
    Command Line:
        python main.py
        python main.py --input ./XML --output-dir ./PLANILHA --mode append

    Python:
        from main import run_extraction
        result = run_extraction("XML", mode="append")
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import yaml

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import ConfigurationManager, get_config
from nfe_report.utils.logger import setup_logger_from_config, get_logger
from nfe_report.utils.exceptions import DirectoryError


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Unset options fall back to config/settings.yaml.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="Extract NF-e line items into an Excel report",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    Process the default XML folder, replacing the report:
        python main.py

    Accumulate rows from another folder:
        python main.py --input ./notas/janeiro --mode append
        """
    )

    parser.add_argument(
        "--input", "-i",
        type=str,
        default=None,
        help="Folder containing NF-e XML files (default: paths.input_dir)"
    )

    parser.add_argument(
        "--output-dir", "-o",
        type=str,
        default=None,
        help="Folder for the report (default: paths.output_dir)"
    )

    parser.add_argument(
        "--filename", "-f",
        type=str,
        default=None,
        help="Report file name (default: output.filename)"
    )

    parser.add_argument(
        "--mode", "-m",
        choices=["overwrite", "append"],
        default=None,
        help="overwrite replaces the report for every document; "
             "append adds rows to it (default: output.mode)"
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to custom configuration file"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only show warnings and errors"
    )

    return parser.parse_args(argv)


def run_extraction(
    input_dir: Optional[str] = None,
    output_dir: Optional[str] = None,
    filename: Optional[str] = None,
    mode: Optional[str] = None,
    config_path: Optional[str] = None
):
    """
    Run the NF-e report pipeline.

    Args:
        input_dir: Folder with XML documents.
        output_dir: Folder for the report.
        filename: Report file name.
        mode: "overwrite" or "append".
        config_path: Optional custom configuration file path.

    Returns:
        BatchResult describing every processed document.

    Raises:
        DirectoryError: If the input folder cannot be listed.

    Example:
        >>> result = run_extraction("XML", mode="append")
        >>> result.rows_written
        12
    """
    ConfigurationManager(config_path)

    from nfe_report.output_handler import ExcelExporter, WriteMode
    from nfe_report.pipeline import BatchProcessor

    exporter = ExcelExporter(output_dir=output_dir, filename=filename)
    write_mode = WriteMode(mode or get_config("output.mode", "overwrite"))

    processor = BatchProcessor(
        input_dir=input_dir,
        exporter=exporter,
        mode=write_mode
    )
    return processor.run()


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function - entry point for command-line execution.

    Returns:
        Exit code: 0 when the run completes (even if some documents were
        skipped), 1 when the input folder or configuration is unusable.
    """
    try:
        args = parse_arguments(argv)

        config = ConfigurationManager(args.config)
        setup_logger_from_config(debug=args.debug, quiet=args.quiet)
        logger = get_logger(__name__)

        logger.info("=" * 60)
        logger.info("NF-E LINE-ITEM REPORT")
        logger.info("=" * 60)
        logger.info(f"Version: {config.get('project.version', '1.0.0')}")

        result = run_extraction(
            input_dir=args.input,
            output_dir=args.output_dir,
            filename=args.filename,
            mode=args.mode,
            config_path=args.config
        )

        if result.documents_found:
            logger.info("=" * 60)
            logger.info(f"Done. {result.summary()}")
            logger.info(f"Report: {result.output_path}")
            logger.info("=" * 60)

        return 0

    except DirectoryError as e:
        get_logger(__name__).error(str(e))
        return 1

    except (FileNotFoundError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
