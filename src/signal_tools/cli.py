#!/usr/bin/env python3
"""
Signal Tools - Command Line Interface

Inspect filter designs and decimator plans without writing code.
"""

import argparse
import json
import logging
import sys
from typing import Optional

from . import __version__
from .core.config import ConfigurationError, DecimatorConfig


def cmd_info(args: argparse.Namespace) -> int:
    """Display module information."""
    print(f"Signal Tools v{__version__}")
    print()
    print("Streaming filtering and decimation")
    print("==================================")
    print()
    print("Features:")
    print("  - Windowed-sinc lowpass FIR design (unity DC gain)")
    print("  - One-shot and streaming decimation (real and complex)")
    print("  - Streaming FIR filtering and zero-phase filtfilt")
    print("  - Biquad IIR cascade with persistent state")
    return 0


def cmd_design(args: argparse.Namespace) -> int:
    """Design lowpass taps and print them."""
    from .dsp.taps import design_lowpass_fir

    taps = design_lowpass_fir(args.taps, args.cutoff, args.sample_rate, args.window)

    if args.json:
        print(json.dumps([float(t) for t in taps]))
    else:
        for t in taps:
            print(f"{t:.10g}")
    return 0


def cmd_plan(args: argparse.Namespace) -> int:
    """Describe the decimator for a rate pair."""
    config = DecimatorConfig(
        input_rate=args.input_rate,
        output_rate=args.output_rate,
        num_taps=args.taps,
        window=args.window,
        cutoff=args.cutoff,
    )
    downsampler = config.create()

    print(f"Input rate:   {downsampler.input_rate} Hz")
    print(f"Output rate:  {downsampler.output_rate} Hz")
    print(f"Factor:       {downsampler.factor}")
    print(f"Taps:         {len(downsampler.taps)}")
    print(f"Group delay:  {downsampler.group_delay * 1e3:.3f} ms")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog="signal-tools",
        description="Signal Tools - Streaming filtering and decimation",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Info command
    info_parser = subparsers.add_parser("info", help="Display module information")
    info_parser.set_defaults(func=cmd_info)

    # Design command
    design_parser = subparsers.add_parser("design", help="Design lowpass FIR taps")
    design_parser.add_argument(
        "--taps", "-n", type=int, default=15, help="Number of taps, odd (default: 15)"
    )
    design_parser.add_argument(
        "--cutoff", "-c", type=float, required=True, help="Cutoff frequency in Hz"
    )
    design_parser.add_argument(
        "--sample-rate",
        "-r",
        type=float,
        default=48000,
        help="Sample rate in Hz (default: 48000)",
    )
    design_parser.add_argument(
        "--window", "-w", default="hamming", help="Window function (default: hamming)"
    )
    design_parser.add_argument(
        "--json", action="store_true", help="Print taps as a JSON array"
    )
    design_parser.set_defaults(func=cmd_design)

    # Plan command
    plan_parser = subparsers.add_parser("plan", help="Describe a decimator")
    plan_parser.add_argument("input_rate", type=int, help="Input sample rate in Hz")
    plan_parser.add_argument("output_rate", type=int, help="Output sample rate in Hz")
    plan_parser.add_argument(
        "--taps", "-n", type=int, default=15, help="Number of taps, odd (default: 15)"
    )
    plan_parser.add_argument(
        "--cutoff", "-c", type=float, default=None,
        help="Cutoff in Hz (default: output Nyquist)",
    )
    plan_parser.add_argument(
        "--window", "-w", default="hamming", help="Window function (default: hamming)"
    )
    plan_parser.set_defaults(func=cmd_plan)

    return parser


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point.

    Args:
        argv: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    if args.command is None:
        # No command specified - show info
        return cmd_info(args)

    try:
        return args.func(args)
    except ConfigurationError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
