#!/usr/bin/env python3
"""
iniload CLI

Load an INI-style configuration file together with everything it pulls in
through #include / #require directives, and print the merged result or the
include tree.
"""

import argparse
import logging
import sys
from pathlib import Path

from loader import ConfigLoadError, FileResolver, LoaderConfig, load_config
from store.model import ConfigStore, StoreError
from exporters import to_ascii, to_ini, to_json, to_yaml


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="iniload",
        description="Load INI-style configuration files, following #include and #require directives.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  iniload app.cfg                       # Merged configuration as INI
  iniload app.cfg -f json -o app.json   # JSON output to file
  iniload app.cfg -f yaml --section db  # One section as YAML
  iniload app.cfg --get db port         # Print a single value
  iniload app.cfg -f tree               # Show which file included which
  iniload app.cfg local.cfg -vv         # Several roots, debug logging
        """,
    )
    
    # Positional arguments
    parser.add_argument(
        "files",
        nargs="+",
        help="Configuration files to load; the first one is the root",
    )
    
    # Output options
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Output file (default: stdout)",
    )
    
    parser.add_argument(
        "-f", "--format",
        choices=["ini", "json", "yaml", "tree"],
        default="ini",
        help="Output format (default: ini)",
    )
    
    parser.add_argument(
        "--section",
        type=str,
        default=None,
        help="Only output this section",
    )
    
    parser.add_argument(
        "--get",
        nargs=2,
        metavar=("SECTION", "OPTION"),
        default=None,
        help="Print the value of a single option",
    )
    
    parser.add_argument(
        "--raw",
        action="store_true",
        help="Do not expand %%(name)s references in values",
    )
    
    # Tree-specific options
    parser.add_argument(
        "--ascii-style",
        choices=["tree", "ascii"],
        default="tree",
        help="Tree output style: 'tree' (Unicode) or 'ascii' (pure ASCII)",
    )
    
    parser.add_argument(
        "--hide-skipped",
        action="store_true",
        help="Hide optional files that could not be opened from tree output",
    )
    
    # Loading options
    parser.add_argument(
        "--separators",
        type=str,
        default=LoaderConfig.separators,
        help="Characters that separate option from value (default: '=:')",
    )
    
    parser.add_argument(
        "--encoding",
        type=str,
        default=LoaderConfig.encoding,
        help="Encoding of the configuration files (default: utf-8)",
    )
    
    parser.add_argument(
        "--unmatched-glob-literal",
        action="store_true",
        help="Queue a glob pattern that matches nothing as a literal path "
             "(so #require of an empty pattern fails)",
    )
    
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Log loading progress (-vv for debug output)",
    )
    
    return parser.parse_args(args)


def configure_logging(verbosity: int) -> None:
    """Send log records to stderr at a level chosen by -v flags."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(args=None):
    """Main entry point."""
    parsed = parse_args(args)
    configure_logging(parsed.verbose)
    
    try:
        config = LoaderConfig(
            separators=parsed.separators,
            encoding=parsed.encoding,
            unmatched_glob_literal=parsed.unmatched_glob_literal,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    
    resolver = FileResolver(config)
    store = ConfigStore()
    
    # Load the configuration
    try:
        load_config(parsed.files, store=store, config=config, resolver=resolver)
    except ConfigLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    
    # Generate output
    try:
        if parsed.get:
            section, option = parsed.get
            output = store.get(section, option, raw=parsed.raw)
        elif parsed.format == "tree":
            output = to_ascii(
                graph=resolver.graph,
                style=parsed.ascii_style,
                include_skipped=not parsed.hide_skipped,
            )
        elif parsed.format == "json":
            output = to_json(store, expand=not parsed.raw, section=parsed.section)
        elif parsed.format == "yaml":
            output = to_yaml(store, expand=not parsed.raw, section=parsed.section)
        else:  # ini (default)
            output = to_ini(store, section=parsed.section)
    except (StoreError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    
    # Write output
    if parsed.output:
        try:
            output_path = Path(parsed.output)
            output_path.write_text(output, encoding="utf-8")
            print(f"Output written to: {output_path}", file=sys.stderr)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
    else:
        print(output.rstrip("\n"))
    
    return 0


if __name__ == "__main__":
    sys.exit(main())
