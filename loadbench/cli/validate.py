"""CLI for checking a suite file without sending any requests."""

import argparse
import asyncio
import sys

from ..core.suite_loader import load_suite


def main():
    """Main entry point for validate CLI."""
    parser = argparse.ArgumentParser(
        description="Validate a load test suite file"
    )
    parser.add_argument(
        "config",
        nargs="?",
        default="config.json",
        help="Suite file with a JSON array of tests (default: config.json)",
    )
    args = parser.parse_args()

    try:
        specs = asyncio.run(load_suite(args.config))
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading suite: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nValidation interrupted by user")
        sys.exit(1)
    except Exception as e:
        print(f"Error reading suite: {e}")
        sys.exit(1)

    invalid = 0
    for spec in specs:
        try:
            spec.validate()
        except ValueError as e:
            invalid += 1
            print(f"INVALID {spec.name!r}: {e}")
        else:
            mode = "duration" if spec.is_duration_mode else "count"
            print(f"OK      {spec.name!r} ({mode} mode)")

    print(f"\n{len(specs) - invalid}/{len(specs)} tests valid")
    if invalid:
        sys.exit(1)


if __name__ == "__main__":
    main()
