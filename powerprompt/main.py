"""
Main entry point for powerprompt.
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console
from rich.logging import RichHandler

from .config import load_config
from .constants import APP_NAME, APP_VERSION, APP_DESCRIPTION
from .errors import ConvertError
from .modules import RuntimeSignals, default_manager
from .shell import Shell


logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description=APP_DESCRIPTION
    )
    
    parser.add_argument(
        "-v", "--version",
        action="version",
        version=f"{APP_NAME} {APP_VERSION}"
    )
    
    parser.add_argument(
        "-s", "--shell",
        type=str,
        choices=[shell.value for shell in Shell],
        help="Shell to escape the prompt for (default: detected from $SHELL)"
    )
    
    parser.add_argument(
        "-e", "--exit-code",
        type=int,
        default=0,
        help="Exit status of the previous command"
    )
    
    parser.add_argument(
        "--config",
        type=str,
        help="Path to config file"
    )
    
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail instead of omitting modules with invalid configuration"
    )
    
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log debug output to stderr"
    )
    
    return parser.parse_args(argv)


def setup_logging(debug: bool) -> None:
    """Send log records to stderr so they never end up inside the prompt."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(args.debug)
    
    shell = Shell.from_name(args.shell) if args.shell else Shell.detect()
    config = load_config(Path(args.config) if args.config else None)
    signals = RuntimeSignals(exit_code=args.exit_code)
    logger.debug("Rendering for %s with exit code %d", shell.value, args.exit_code)
    
    manager = default_manager(strict=args.strict)
    try:
        prompt = manager.render_all(config, signals, shell)
    except ConvertError as e:
        print(f"{APP_NAME}: error: {e}", file=sys.stderr)
        return 1
    
    sys.stdout.write(prompt)
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
