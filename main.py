#!/usr/bin/env python3
"""Intcode Command Line Interface.

Run Intcode programs, or search an amplifier network for its best phases.

Usage:
    python main.py --program inputs/day09.txt --input 1
    python main.py --program inputs/day07.txt --amplifiers 5 --phase-bias 5
"""

import argparse
import logging
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from intcode import AmplifierNetwork, IntcodeError, IntcodeProgram, load_program_file, parse_program


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Intcode: pausable integer-program VM",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Run a diagnostic program with input 1 and print every output
    python main.py --program inputs/day09.txt --input 1

    # Search a five-amplifier feedback loop (phases 5-9)
    python main.py --program inputs/day07.txt --amplifiers 5

    # Serial amplifier chain (phases 0-4)
    python main.py --program inputs/day07.txt --amplifiers 5 --phase-bias 0

    # Run inline Intcode with a full trace
    python main.py --inline "104,1125899906842624,99" --trace
        """
    )

    parser.add_argument(
        "--program", "-p",
        type=str,
        help="Path to a comma-separated Intcode program"
    )
    parser.add_argument(
        "--inline", "-i",
        type=str,
        help="Inline comma-separated Intcode program"
    )
    parser.add_argument(
        "--input",
        type=int,
        default=1,
        help="First input value. Default: 1"
    )
    parser.add_argument(
        "--second-input",
        type=int,
        default=0,
        help="Value for every input after the first. Default: 0"
    )
    parser.add_argument(
        "--amplifiers", "-a",
        type=int,
        help="Search an amplifier network of this size instead of a single run"
    )
    parser.add_argument(
        "--phase-bias",
        type=int,
        default=AmplifierNetwork.FEEDBACK_PHASE_BIAS,
        help="Lowest phase setting for the amplifier search. Default: 5"
    )
    parser.add_argument(
        "--max-cycles",
        type=int,
        help="Abort after this many cycles (per program). Default: unbounded"
    )
    parser.add_argument(
        "--trace", "-t",
        action="store_true",
        help="Print full execution trace (single run only)"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Minimal output (result only)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )
    return parser


def run_single(memory, args) -> int:
    program = IntcodeProgram(
        memory,
        args.input,
        args.second_input,
        trace=args.trace,
        max_cycles=args.max_cycles,
    )

    if not args.quiet:
        print("-" * 60)
        print("Executing...")
        print("-" * 60)

    outputs = []
    try:
        while True:
            value = program.run_program()
            if value is None:
                break
            outputs.append(value)
            if not args.quiet:
                print(f"Output: {value}")
    except IntcodeError as e:
        print(f"Execution error: {e}")

    if args.trace:
        program.print_trace()
    elif not args.quiet:
        print()
        summary = program.get_summary()
        print(f"Cycles: {summary['cycles']}")
        print(f"Halted: {summary['halted']}")
        print(f"Memory: {summary['memory_size']} cells")
        if summary["error"]:
            print(f"Error: {summary['error']}")
    elif outputs:
        print(outputs[-1])

    return 0 if program.error is None else 1


def run_network(memory, args) -> int:
    network = AmplifierNetwork(
        memory,
        amplifier_count=args.amplifiers,
        phase_bias=args.phase_bias,
        max_cycles=args.max_cycles,
    )

    if not args.quiet:
        low = args.phase_bias
        high = args.phase_bias + args.amplifiers - 1
        print(f"Searching {args.amplifiers} amplifiers, phases {low}-{high}")

    try:
        phases, signal = network.best_phases()
    except IntcodeError as e:
        print(f"Execution error: {e}")
        return 1

    if args.quiet:
        print(signal)
    else:
        print(f"Best phases: {','.join(str(p) for p in phases)}")
        print(f"Max signal: {signal}")
    return 0


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    # Validate arguments
    if not args.program and not args.inline:
        parser.error("Either --program or --inline is required")
    if args.amplifiers is not None and args.amplifiers < 1:
        parser.error("--amplifiers must be at least 1")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Load program
    try:
        if args.program:
            program_path = Path(args.program)
            if not program_path.exists():
                print(f"Error: Program file not found: {args.program}")
                return 1
            if not args.quiet:
                print(f"Loading program: {args.program}")
            memory = load_program_file(program_path)
        else:
            if not args.quiet:
                print("Running inline program")
            memory = parse_program(args.inline)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    if args.amplifiers is not None:
        return run_network(memory, args)
    return run_single(memory, args)


if __name__ == "__main__":
    sys.exit(main())
