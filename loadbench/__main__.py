"""Main entry point for the loadbench package.

Usage:
    python -m loadbench run config.json
    python -m loadbench run config.json --output results.json --max-in-flight 500
    python -m loadbench validate config.json
"""

import sys


def main():
    """Main entry point that dispatches to subcommands."""
    if len(sys.argv) < 2:
        print_help()
        sys.exit(1)

    command = sys.argv[1]

    if command in ["-h", "--help", "help"]:
        print_help()
        sys.exit(0)

    # Remove the command from argv so subcommand parsers see correct args
    sys.argv = [sys.argv[0]] + sys.argv[2:]

    if command == "run":
        from .cli.run import main as run_main

        run_main()
    elif command == "validate":
        from .cli.validate import main as validate_main

        validate_main()
    else:
        print(f"Unknown command: {command}")
        print_help()
        sys.exit(1)


def print_help():
    """Print help message."""
    print(
        """HTTP Load Test Runner

Usage: python -m loadbench <command> [options]

Commands:
    run           Run every test in a suite file concurrently and save a report
    validate      Check a suite file without sending any requests

Examples:
    # Run the suite in config.json and write results.json
    python -m loadbench run config.json

    # Cap in-flight requests of duration-mode tests and save a chart
    python -m loadbench run config.json --max-in-flight 500 --chart results.png

    # Validate a suite file
    python -m loadbench validate config.json

For command-specific help:
    python -m loadbench <command> --help
"""
    )


if __name__ == "__main__":
    main()
