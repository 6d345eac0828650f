"""
Command-line interface for detection-overlap.

Provides commands for matching a reconstruction against ground truth and
for writing a default configuration file.
"""

import argparse
import sys

from detoverlap.config import load_config, save_default_config
from detoverlap.errors import DetectionOverlapError
from detoverlap.tracer import configure_tracer, get_tracer


def build_parser():
    parser = argparse.ArgumentParser(
        prog="detoverlap",
        description="Detection overlap: one-to-one matching of ground truth and reconstructed regions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    run_parser = subparsers.add_parser("run", help="Match a reconstruction against ground truth")
    run_parser.add_argument(
        "--gt", "-g",
        required=True,
        help="Ground truth label map (.npy or label image)",
    )
    run_parser.add_argument(
        "--rec", "-r",
        required=True,
        help="Reconstruction label map (.npy or label image)",
    )
    run_parser.add_argument(
        "--out", "-o",
        default=None,
        help="Output directory for the report files",
    )
    run_parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to YAML configuration file",
    )
    run_parser.add_argument(
        "--relabel-gt",
        action="store_true",
        help="Label connected components of the ground truth mask",
    )
    run_parser.add_argument(
        "--relabel-rec",
        action="store_true",
        help="Label connected components of the reconstruction mask",
    )
    run_parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable runtime tracing",
    )
    run_parser.add_argument(
        "--trace-level",
        default=None,
        choices=["ERROR", "WARN", "INFO", "DEBUG", "ALL"],
        help="Trace log level",
    )
    run_parser.add_argument(
        "--trace-file",
        default=None,
        help="Path to write trace logs",
    )
    run_parser.add_argument(
        "--trace-json",
        action="store_true",
        help="Enable JSON trace output",
    )

    init_parser = subparsers.add_parser("init-config", help="Create default config file")
    init_parser.add_argument(
        "--out", "-o",
        default="detoverlap_config.yaml",
        help="Output path for config file",
    )

    return parser


def main(argv=None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "run":
        return handle_run(args)
    elif args.command == "init-config":
        return handle_init_config(args)

    return 0


def handle_run(args):
    """Handle the run command."""
    config = load_config(args.config)

    tracing = config.tracing
    configure_tracer(
        enabled=args.trace or tracing.enabled,
        level=args.trace_level or tracing.level,
        file_path=args.trace_file or tracing.file_path,
        json_output=args.trace_json or tracing.json_output,
    )

    tracer = get_tracer()

    try:
        from detoverlap.io.load_labels import load_label_map
        from detoverlap.io.save_report import format_summary, save_report
        from detoverlap.pipeline import detection_overlap

        with tracer.span("cli_run", module="cli"):
            gt = load_label_map(args.gt, relabel=args.relabel_gt or config.input.relabel_gt)
            rec = load_label_map(args.rec, relabel=args.relabel_rec or config.input.relabel_rec)

            report = detection_overlap(gt, rec, config=config, tracer=tracer)

            if args.out:
                save_report(report, args.out, sources={"ground_truth": args.gt, "reconstruction": args.rec})

        print(format_summary(report))

        if args.out:
            print(f"Outputs saved to: {args.out}/")
            print("  - detection_overlap.json")
            print("  - detection_overlap_summary.txt")

        return 0

    except DetectionOverlapError as e:
        tracer.event(f"Matching failed: {str(e)}", level="ERROR")
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
