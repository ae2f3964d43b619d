"""Main entry point for the local_mw CLI."""

from dotenv import load_dotenv
load_dotenv()

import os
import sys
import argparse
from typing import List, Optional

from . import __version__, SOURCE_URL
from .config import RunConfiguration
from .core.console import ConsoleChannel
from .core.logger import setup_logging
from .operations.registry import registry


def create_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog='local-mw',
        description='Check MediaWiki core, extensions and skins for updates '
                    'and update them if needed.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Check everything, prompting before each pull
  local-mw check /var/www/mediawiki

  # Only report, never pull
  local-mw check /var/www/mediawiki --report-only --report-file status.txt

  # Pull without prompting
  local-mw check /var/www/mediawiki --yes

  # Update a single repository
  local-mw update core --path /var/www/mediawiki
  local-mw update extension WikimediaEvents
  local-mw update skin Vector

Note: Repositories on master/main branches with updates
      will be prompted for pull unless --yes is used.
      Use --report-only to skip pulling entirely.
      A warning will be shown if uncommitted changes exist.
        """
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f"local_mw\nVersion: {__version__}\nSource: {SOURCE_URL}"
    )

    subparsers = parser.add_subparsers(
        dest='operation',
        help='Operation to perform',
        required=False
    )

    for op_name in registry.list_operations():
        op_class = registry.get(op_name)
        op_parser = subparsers.add_parser(
            op_name,
            help=op_class.description
        )

        # Add operation-specific arguments
        if op_name == 'check':
            op_parser.add_argument(
                'path',
                nargs='?',
                help='Path to MediaWiki installation (overrides MEDIAWIKI_PATH)'
            )
        elif op_name == 'update':
            op_parser.add_argument(
                'kind',
                choices=['core', 'extension', 'skin'],
                help='Repository type'
            )
            op_parser.add_argument(
                'name',
                nargs='?',
                help='Extension or skin name (required unless TYPE is core)'
            )
            op_parser.add_argument(
                '--path',
                help='Path to MediaWiki installation (overrides MEDIAWIKI_PATH)'
            )

        _add_common_args(op_parser)

    return parser


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    """Add common arguments to a parser.

    Args:
        parser: Parser to add arguments to
    """
    output_group = parser.add_argument_group('output')
    output_group.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )
    output_group.add_argument(
        '--report-file',
        metavar='FILE',
        help='Save results and summary to a file (overrides LOCAL_MW_REPORT_FILE)'
    )

    update_group = parser.add_argument_group('update control')
    update_group.add_argument(
        '--report-only',
        action='store_true',
        help="Only report status, don't pull updates"
    )
    update_group.add_argument(
        '-y', '--yes',
        action='store_true',
        help='Auto-confirm all pull prompts'
    )

    exec_group = parser.add_argument_group('execution control')
    exec_group.add_argument(
        '--workers',
        type=int,
        metavar='N',
        help='Number of parallel workers (default: CPU count)'
    )
    exec_group.add_argument(
        '--sequential',
        action='store_true',
        help='Force sequential processing (no parallelization)'
    )
    exec_group.add_argument(
        '--git-timeout',
        type=float,
        metavar='SECONDS',
        help='Deadline for each git command (default: none)'
    )


def _prompt_for_path() -> Optional[str]:
    """Ask for the installation path when none was configured."""
    try:
        return input("Enter MediaWiki installation path: ").strip() or None
    except EOFError:
        return None


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.operation:
        parser.print_help()
        return 1

    install_path = args.path or os.getenv('MEDIAWIKI_PATH') or _prompt_for_path()

    logger = setup_logging(
        operation=args.operation,
        verbose=args.verbose,
        log_dir=os.getenv('LOCAL_MW_LOG_DIR')
    )

    try:
        config = RunConfiguration.from_env_and_args(
            install_path=install_path,
            verbose=args.verbose,
            report_only=args.report_only,
            auto_confirm=args.yes,
            update_kind=getattr(args, 'kind', None),
            update_name=getattr(args, 'name', None),
            max_workers=args.workers,
            sequential=args.sequential,
            report_file=args.report_file,
            git_timeout=args.git_timeout
        )

        logger.info("Configuration loaded")
        logger.info(f"  Installation: {config.install_path}")
        logger.info(f"  Workers: {1 if config.sequential else config.max_workers}")
        if config.report_only:
            logger.info("  Report-only mode enabled (no automatic pulls)")
        if config.auto_confirm:
            logger.info("  Auto-yes mode enabled (no prompts)")
        if config.report_file:
            logger.info(f"  Report will be saved to: {config.report_file}")

        operation_class = registry.get(args.operation)
        operation = operation_class(config, channel=ConsoleChannel())
        return operation.run()

    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("\nOperation cancelled by user")
        return 130
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
