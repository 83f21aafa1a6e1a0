"""CLI entry point for pasteclean."""

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .config import load_config
from .deep_clean import STAGES, HtmlDeepCleaner
from .sanitize import basic_sanitize


def print_stage_list() -> None:
    """Print available cleaning stages in execution order."""
    print("Cleaning stages:")
    for slug, (name, desc) in STAGES.items():
        print(f"  {slug:<16} {name} - {desc}")


@dataclass
class CleanFlags:
    """Parsed pasteclean flags."""
    disable: set[str] = field(default_factory=set)
    config: Optional[str] = None
    list_stages: bool = False
    verbose: bool = False
    help: bool = False


def extract_flags(args: list[str]) -> tuple[CleanFlags, list[str]]:
    """Extract pasteclean flags from args, return (flags, remaining_args)."""
    flags = CleanFlags()
    remaining = []

    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--disable":
            if i + 1 < len(args):
                flags.disable.add(args[i + 1])
                i += 2
            else:
                remaining.append(arg)
                i += 1
        elif arg == "--config":
            if i + 1 < len(args):
                flags.config = args[i + 1]
                i += 2
            else:
                remaining.append(arg)
                i += 1
        elif arg == "--list-stages":
            flags.list_stages = True
            i += 1
        elif arg in ("--verbose", "-v"):
            flags.verbose = True
            i += 1
        elif arg in ("--help", "-h"):
            flags.help = True
            i += 1
        else:
            remaining.append(arg)
            i += 1

    return flags, remaining


def print_help() -> None:
    """Print pasteclean help."""
    print("pasteclean - Clean HTML pasted from Word")
    print()
    print("Usage: pasteclean [options] [FILE]")
    print()
    print("Reads HTML from FILE (or stdin when FILE is omitted or '-') and writes")
    print("the cleaned HTML to stdout.")
    print()
    print("Options:")
    print("  --disable <stage>   Skip a cleaning stage by slug (can be repeated)")
    print("  --config <path>     Load settings from this YAML file")
    print("  --list-stages       List cleaning stages and their slugs")
    print("  --verbose, -v       Log pipeline progress to stderr")
    print("  --help, -h          Show this help")
    print()
    print("Examples:")
    print("  pasteclean clipboard.html")
    print("  pasteclean --disable fix-lists < clipboard.html")


def run(args: Optional[list[str]] = None) -> int:
    """Run pasteclean with the given arguments. Returns exit code."""
    if args is None:
        args = sys.argv[1:]

    flags, rest = extract_flags(args)

    if flags.help:
        print_help()
        return 0

    if flags.list_stages:
        print_stage_list()
        return 0

    logging.basicConfig(
        level=logging.DEBUG if flags.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if len(rest) > 1:
        print(f"pasteclean: unexpected arguments: {' '.join(rest[1:])}", file=sys.stderr)
        return 1

    try:
        config = load_config(Path(flags.config) if flags.config else None)
        cleaner = HtmlDeepCleaner(basic_sanitize, config, disabled=flags.disable)
    except (FileNotFoundError, ValueError) as e:
        print(f"pasteclean: {e}", file=sys.stderr)
        return 1

    source = rest[0] if rest else "-"
    if source == "-":
        raw = sys.stdin.read()
    else:
        try:
            raw = Path(source).read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            print(f"pasteclean: {source}: {e.strerror}", file=sys.stderr)
            return 1

    output = cleaner.deep_clean(raw)

    sys.stdout.write(output)
    if output and not output.endswith("\n"):
        sys.stdout.write("\n")

    return 0


def main() -> None:
    """Main entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
