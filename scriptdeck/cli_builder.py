"""Factory for constructing the CLI argument parser."""

import argparse


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct the argparse parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="scriptdeck",
        description="ScriptDeck - run a key-bound Python script on the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    run = subparsers.add_parser(
        "run",
        help="Simulate one key bound to a script",
        description="Simulate one key bound to a script and print key updates",
    )

    run.add_argument("script", help="Path of the Python script to run")

    run.add_argument(
        "--venv",
        type=str,
        help="Virtual environment directory (or its pyvenv.cfg) to run the script with",
    )

    run.add_argument(
        "--interval",
        type=str,
        default="10",
        help="Background service interval in seconds (default: 10)",
    )

    run.add_argument(
        "--once",
        action="store_true",
        help="Press a script key once instead of running the background service",
    )

    run.add_argument(
        "--duration",
        type=float,
        help="How long the background service runs before it is stopped "
        "(default: two and a half intervals)",
    )

    run.add_argument(
        "--display-values",
        dest="display_values",
        action="store_true",
        help="Show the script output as key title",
    )

    for index in (1, 2):
        run.add_argument(
            f"--value{index}",
            type=str,
            help=f"Output value selecting image {index}",
        )
        run.add_argument(
            f"--image{index}",
            type=str,
            help=f"Image shown when the output equals value {index}",
        )

    run.add_argument(
        "--key-id",
        dest="key_id",
        default="key-1",
        help="Identifier of the simulated key (default: key-1)",
    )

    run.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug messages (interpreter paths, exit codes)",
    )

    run.add_argument(
        "--no-color",
        dest="no_color",
        action="store_true",
        help="Disable colored output",
    )

    return parser
