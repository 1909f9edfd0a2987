"""
Entry point for running kiawah_concierge as a module.

Usage:
    python -m kiawah_concierge [command] [options]

Commands:
    run         Run one fetch-all cycle and log a summary (default)
    dump        Run one fetch-all cycle and print every slice

Options:
    --env ENV           Environment (development/production)
    --variant VARIANT   Override weather variant (open_meteo/openweathermap)
"""

from __future__ import annotations

import argparse
import asyncio
import sys


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Kiawah concierge data engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "command",
        nargs="?",
        default="run",
        choices=["run", "dump"],
        help="Command to execute (default: run)",
    )
    parser.add_argument(
        "--env",
        default="development",
        help="Environment (development/production)",
    )
    parser.add_argument(
        "--variant",
        choices=["open_meteo", "openweathermap"],
        default=None,
        help="Override weather variant",
    )

    args = parser.parse_args(argv)

    # Import here to avoid slow startup for --help
    from kiawah_concierge.app.run import run_cycle, run_dump

    try:
        if args.command == "run":
            return asyncio.run(run_cycle(env=args.env, variant=args.variant))
        elif args.command == "dump":
            return asyncio.run(run_dump(env=args.env, variant=args.variant))
        else:
            parser.print_help()
            return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 130
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
