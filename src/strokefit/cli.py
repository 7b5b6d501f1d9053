"""
Command-line interface for strokefit.

Replays recorded strokes through the curve fitter and reports how they were
segmented. Fitted curves are not written anywhere; rendering and storage are
left to the caller.
"""

import argparse
import json
import sys

from strokefit.config import load_config, save_default_config
from strokefit.tracer import configure_from_config, configure_tracer, get_tracer


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="strokefit: incremental Bezier fitting of freehand strokes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    replay_parser = subparsers.add_parser("replay", help="Fit recorded strokes and print a summary")
    replay_parser.add_argument(
        "--input", "-i",
        required=True,
        help="JSON file holding a list of strokes, each a list of points",
    )
    replay_parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to YAML configuration file",
    )
    replay_parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable runtime tracing",
    )
    replay_parser.add_argument(
        "--trace-level",
        default="INFO",
        choices=["ERROR", "WARN", "INFO", "DEBUG"],
        help="Trace log level",
    )
    replay_parser.add_argument(
        "--trace-file",
        default=None,
        help="Path to write trace logs",
    )
    replay_parser.add_argument(
        "--trace-json",
        action="store_true",
        help="Enable JSON trace output",
    )

    init_parser = subparsers.add_parser("init-config", help="Create default config file")
    init_parser.add_argument(
        "--out", "-o",
        default="strokefit_config.yaml",
        help="Output path for config file",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "replay":
        return handle_replay(args)
    elif args.command == "init-config":
        return handle_init_config(args)

    return 0


def load_strokes(path):
    """Read a list of strokes from a JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, list) or not all(isinstance(stroke, list) for stroke in data):
        raise ValueError(f"{path}: expected a JSON list of strokes")
    return data


def handle_replay(args):
    """Handle the replay command."""
    tracer = get_tracer()

    try:
        from strokefit.curve import fit_stroke

        config = load_config(args.config)

        # Command-line tracing flags win over the config file
        if args.trace:
            configure_tracer(
                enabled=True,
                level=args.trace_level,
                file_path=args.trace_file,
                json_output=args.trace_json,
            )
        else:
            configure_from_config(config.tracing)

        strokes = load_strokes(args.input)

        with tracer.span("cli_replay", module="cli", strokes=strokes):
            results = [fit_stroke(stroke, config) for stroke in strokes]

        print(f"Replayed {len(results)} strokes from {args.input}")
        for index, result in enumerate(results):
            statuses = ", ".join(f"{k}={v}" for k, v in result.status_counts.items())
            print(
                f"  [{index}] {result.stroke_id}: {result.point_count} points "
                f"({result.dropped_points} dropped) -> {result.segment_count} segments, "
                f"mean error {result.mean_error:.3f} [{statuses}]"
            )

        return 0

    except Exception as e:
        tracer.event(f"Replay failed: {str(e)}", level="ERROR")
        print(f"\nError: {str(e)}", file=sys.stderr)
        return 1

    finally:
        tracer.config.close()


def handle_init_config(args):
    """Handle the init-config command."""
    save_default_config(args.out)
    print(f"Default configuration saved to: {args.out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
