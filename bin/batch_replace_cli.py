#!/usr/bin/env python3
"""
Batch search and replace language strings.

Useful for changing a term that occurs in many language strings. Every
string whose local, master or original text contains the search term is
shown with the proposed replacement. Matches that may be part of a longer
word ("course" in "courses") are held back and reviewed one by one after
all other matches.

Default mode is interactive, use -y or -n for non-interactive runs.

Usage examples:
  bin/batch_replace_cli.py -s course -r subject
  bin/batch_replace_cli.py -s course -r subject -f s      # "courses" is safe to replace
  bin/batch_replace_cli.py --lang nl --components moodle,quiz --search cursus --replace vak
  bin/batch_replace_cli.py -x -s 'cour(se|ses)\\b' -r 'subject'
"""

import argparse
import logging
import sys
from pathlib import Path

# Script location based path constants
_SCRIPT_DIR = Path(__file__).resolve().parent   # bin/

# Ensure bin/ is on sys.path so local package imports resolve without PYTHONPATH
if str(_SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(_SCRIPT_DIR))

from batch_replace.config import Config
from batch_replace.console import RichConsole
from batch_replace.exceptions import ConfigurationError, NoMatchesError, StoreError
from batch_replace.runner import run_batch_replace
from batch_replace.store import YamlStringStore


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Batch search and replace language strings",
        epilog=__doc__.split("Usage examples:", 1)[1],
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-s", "--search", default="", help="Case sensitive string to search for")
    parser.add_argument("-r", "--replace", default=None, help="Case sensitive string that replaces --search")
    parser.add_argument("-l", "--lang", default="",
                        help="Language to search in (default: %s)" % Config().default_lang)
    parser.add_argument("-c", "--components", default="",
                        help="Comma separated components to search in (default: all)")
    parser.add_argument("-y", "--yes", "--assume-yes", dest="assume_yes", action="store_true",
                        help="Run without interaction and answer yes to all matches")
    parser.add_argument("-n", "--no", "--assume-no", dest="assume_no", action="store_true",
                        help="Run without interaction and answer no to all questions")
    parser.add_argument("-x", "--regex", action="store_true", help="Use the search value as a regular expression")
    parser.add_argument("-p", "--prefix", default=None,
                        help="Case sensitive prefix that makes a match inside a longer word safe to replace")
    parser.add_argument("-f", "--suffix", default=None,
                        help="Case sensitive suffix that makes a match inside a longer word safe to replace")
    parser.add_argument("-i", "--ignore-case", action="store_true",
                        help="Match the search string case-insensitively and keep the capitalisation of each match")
    parser.add_argument("--store-dir", default=None, help="String store directory (default: %s)" % Config().store_dir)
    parser.add_argument("--no-colour", dest="colour", action="store_false", help="Disable coloured output")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="Set the logging level (default: %(default)s)")
    return parser


def main() -> int:
    """Main function"""
    parser = _build_parser()
    args = parser.parse_args()

    # Set up logging configuration
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(levelname)s - %(filename)s:%(lineno)d - %(message)s',
        stream=sys.stderr
    )

    config = Config(
        store_dir=args.store_dir,
        assume_yes=args.assume_yes,
        assume_no=args.assume_no,
        regex=args.regex,
        ignore_case=args.ignore_case,
        prefix=args.prefix,
        suffix=args.suffix,
        colour=args.colour,
    )
    components = [c.strip() for c in args.components.split(",") if c.strip()]
    store = YamlStringStore(config.store_dir)
    console = RichConsole(colour=config.colour)

    try:
        result = run_batch_replace(
            config,
            store,
            console,
            search=args.search,
            replace=args.replace,
            lang=args.lang or None,
            components=components,
        )
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1
    except NoMatchesError as e:
        print(str(e))
        return 0
    except StoreError as e:
        print(f"Error: {e}", file=sys.stderr)
        print("Session aborted, nothing checked in", file=sys.stderr)
        return 1
    except (EOFError, KeyboardInterrupt):
        print("\nSession aborted, nothing checked in", file=sys.stderr)
        return 130

    if result.committed or config.assume_no:
        return 0
    return 2


if __name__ == "__main__":
    sys.exit(main())
