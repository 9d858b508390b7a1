"""
Main entry point for mvexport.

Reads an analysis result (JSON or YAML) and a metadata CSV, and writes the
mvMapper table:

    python -m mvexport --analysis dapc.json --type dapc --metadata loc.csv
"""

import argparse
import logging
import sys
from typing import Any, Dict, List, Optional

import pandas as pd
import yaml

from mvexport.analysis.results import RESULT_TYPES, load_analysis
from mvexport.components.config import ConfigManager, read_config_file
from mvexport.errors import MvExportError
from mvexport.exports.exporter import Exporter

logger = logging.getLogger('mvexport')


def setup_logging(level: str = 'INFO') -> None:
    """
    Set up logging.

    Args:
        level: Logging level
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler()
        ]
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(description='Export multivariate analyses for mvMapper')

    parser.add_argument(
        '--analysis',
        required=True,
        help='Analysis result file (JSON or YAML)'
    )

    parser.add_argument(
        '--type',
        dest='kind',
        required=True,
        choices=sorted(RESULT_TYPES),
        help='Kind of analysis'
    )

    parser.add_argument(
        '--metadata',
        required=True,
        help='CSV file with key, lat and lon columns'
    )

    parser.add_argument(
        '--out-file',
        help='Output CSV file (default: mvmapper_data_<timestamp>.csv)'
    )

    parser.add_argument(
        '--no-write',
        action='store_true',
        help='Print the table instead of writing it'
    )

    parser.add_argument(
        '--sort-keys',
        action='store_true',
        help='Sort rows by key'
    )

    parser.add_argument(
        '--config',
        help='Path to configuration file'
    )

    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='Logging level (default: logging.level from the configuration)'
    )

    return parser.parse_args(argv)


def keys_as_text(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Convert the entity identifiers of an analysis payload to strings.

    Metadata keys are read from CSV as text, so identifiers such as 1, 2, 3
    must be text on both sides to match.

    Args:
        payload: Analysis payload read from JSON or YAML

    Returns:
        A copy of the payload with text identifiers
    """
    payload = dict(payload)
    for name in ('keys', 'rownames'):
        if payload.get(name) is not None:
            payload[name] = [str(key) for key in payload[name]]
    return payload


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit status
    """
    args = parse_args(argv)

    overrides = {}
    try:
        if args.config:
            overrides.update(read_config_file(args.config))
    except (OSError, ValueError, yaml.YAMLError) as e:
        setup_logging(args.log_level or 'WARNING')
        logger.error(f"Could not read configuration file {args.config}: {e}")
        return 1
    if args.sort_keys:
        overrides.setdefault('export', {})['sort-keys'] = True

    config = ConfigManager.get_config(overrides)
    setup_logging(args.log_level or config.get('logging.level', 'warning'))

    # MvExportError subclasses ValueError, OSError or TypeError
    try:
        payload = read_config_file(args.analysis)
        if not isinstance(payload, dict):
            raise ValueError(f"Analysis file {args.analysis} does not hold a mapping")
        analysis = load_analysis(keys_as_text(payload), args.kind)
        metadata = pd.read_csv(args.metadata, dtype={'key': str})
        out = Exporter(config).export(
            analysis, metadata,
            write_file=not args.no_write,
            out_file=args.out_file
        )
    except (MvExportError, OSError, ValueError, yaml.YAMLError) as e:
        logger.error(str(e))
        return 1

    if args.no_write:
        out.to_csv(sys.stdout, index=False)
    return 0


if __name__ == '__main__':
    sys.exit(main())
