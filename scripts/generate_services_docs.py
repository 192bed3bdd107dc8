#!/usr/bin/env python3
"""
Service Documentation Generator

Renders the service scope registry as a markdown table (or JSON) for the docs.
"""

import argparse
import json
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config.enhanced_logging import get_logger, log_execution_time, setup_logger  # noqa: E402
from config.settings import settings  # noqa: E402
from googleauth.scope_registry import ScopeRegistry  # noqa: E402


@log_execution_time
def render_services_doc(as_json=False, user_only=False):
    """Render the registry table, optionally restricted to user services."""
    infos = ScopeRegistry.services_info()
    if user_only:
        allowed = set(ScopeRegistry.user_services())
        infos = [info for info in infos if info.service in allowed]

    if as_json:
        return json.dumps([info.to_json_dict() for info in infos], indent=2) + "\n"
    return ScopeRegistry.services_markdown(infos)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Generate the Google services scope table")
    parser.add_argument("--output", "-o", help="Write to this file instead of stdout")
    parser.add_argument("--json", action="store_true", help="Emit JSON instead of markdown")
    parser.add_argument("--user-only", action="store_true", help="Only services available to individual accounts")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logger(level=settings.log_level, log_to_file=settings.log_to_file, log_path=settings.log_path)
    logger = get_logger(__name__)

    content = render_services_doc(as_json=args.json, user_only=args.user_only)

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
        logger.info(f"Wrote service table to {output_path}")
    else:
        sys.stdout.write(content)
    return 0


if __name__ == "__main__":
    sys.exit(main())
