# cli.py
# Command-line interface: hash strings and files, verify, compare and export.

from __future__ import annotations

import argparse
import logging
import sys
import typing as t

from hashing import (
    DEFAULT_ALGORITHM,
    Algorithm,
    ExportFormat,
    HashResult,
    export_result,
    export_results,
    hash_input,
    verify,
)
from utils import HashError

__version__ = "0.1.0"

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_MISMATCH = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pysha1sum",
        description="Generate cryptographic hashes for strings and files.",
    )
    parser.add_argument("input", nargs="?", metavar="INPUT", help="file path or string to hash")
    parser.add_argument("-a", "--algorithm", default=DEFAULT_ALGORITHM, help="hash algorithm to use (default: %(default)s)")
    parser.add_argument("-l", "--list-algorithms", action="store_true", help="list all available algorithms")
    parser.add_argument("-e", "--export", metavar="FILE", help="export result to file")
    parser.add_argument(
        "-f", "--format",
        default=ExportFormat.TEXT.value,
        choices=[f.value for f in ExportFormat],
        help="export format (default: %(default)s)",
    )
    parser.add_argument("-A", "--all-algorithms", action="store_true", help="compute hashes for all algorithms")
    parser.add_argument("-s", "--string", action="store_true", help="treat input as a string even if it matches a file path")
    parser.add_argument("-q", "--quiet", action="store_true", help="only output the hash")
    parser.add_argument("-c", "--verify", metavar="EXPECTED", help="verify hash against expected value")
    parser.add_argument("-C", "--compare", metavar="INPUT2", help="compare two files or strings by hash")
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug information to stderr")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def list_algorithms(out: t.TextIO) -> None:
    print("Available hash algorithms:", file=out)
    print(file=out)
    for algo in Algorithm.all():
        print(f"  {algo.display_name:<15} {algo.value:<15} {algo.description}", file=out)


def display_result(result: HashResult, out: t.TextIO) -> None:
    print(f"Algorithm:  {result.algorithm.upper()}", file=out)
    print(f"Input type: {result.input_type}", file=out)
    if result.input_path is not None:
        print(f"File path:  {result.input_path}", file=out)
    print(f"Hash:       {result.digest}", file=out)


def process_single_algorithm(args: argparse.Namespace, out: t.TextIO, err: t.TextIO) -> int:
    algorithm = Algorithm.from_str(args.algorithm)
    result = hash_input(args.input, algorithm, args.string)

    if args.verify is not None:
        matches = verify(result.digest, args.verify)
        logger.debug("verification of %s: %s", result.digest, matches)
        if args.quiet:
            return EXIT_OK if matches else EXIT_MISMATCH
        if matches:
            print("✓ Hash verification PASSED", file=out)
            print(f"{algorithm.value.upper()}: {result.digest}", file=out)
            return EXIT_OK
        print("✗ Hash verification FAILED", file=err)
        print(f"Expected: {args.verify}", file=err)
        print(f"Got:      {result.digest}", file=err)
        return EXIT_MISMATCH

    if args.quiet:
        print(result.digest, file=out)
    else:
        display_result(result, out)

    if args.export:
        path = export_result(result, args.export, args.format)
        print(f"Exported to: {path}", file=out)

    return EXIT_OK


def process_all_algorithms(args: argparse.Namespace, out: t.TextIO) -> int:
    if not args.quiet:
        print("Computing hashes for all algorithms...", file=out)
        print(file=out)

    results = []
    for algorithm in Algorithm.all():
        result = hash_input(args.input, algorithm, args.string)
        if not args.quiet:
            print(f"{algorithm.value.upper() + ':':<15} {result.digest}", file=out)
        results.append(result)

    if args.export:
        export_results(results, args.export, args.format)
        if args.format == ExportFormat.JSON.value:
            print(f"Exported all results to: {args.export}", file=out)
        else:
            print(f"Exported all results to: {args.export}.*", file=out)

    return EXIT_OK


def compare_single_algorithm(args: argparse.Namespace, out: t.TextIO) -> int:
    algorithm = Algorithm.from_str(args.algorithm)
    first = hash_input(args.input, algorithm, args.string)
    second = hash_input(args.compare, algorithm, args.string)
    matches = first.digest == second.digest

    if args.quiet:
        return EXIT_OK if matches else EXIT_MISMATCH

    print(f"Comparing using {algorithm.value.upper()}", file=out)
    print(file=out)
    print(f"Input 1: {first.input_path or args.input} ({first.input_type})", file=out)
    print(f"Hash 1:  {first.digest}", file=out)
    print(file=out)
    print(f"Input 2: {second.input_path or args.compare} ({second.input_type})", file=out)
    print(f"Hash 2:  {second.digest}", file=out)
    print(file=out)

    if matches:
        print("✓ MATCH - Inputs are identical", file=out)
        return EXIT_OK
    print("✗ NO MATCH - Inputs are different", file=out)
    return EXIT_MISMATCH


def compare_all_algorithms(args: argparse.Namespace, out: t.TextIO) -> int:
    match_count = mismatch_count = 0

    if not args.quiet:
        print("Comparing with all algorithms...", file=out)
        print(file=out)

    for algorithm in Algorithm.all():
        first = hash_input(args.input, algorithm, args.string).digest
        second = hash_input(args.compare, algorithm, args.string).digest
        matches = first == second
        if matches:
            match_count += 1
        else:
            mismatch_count += 1

        if not args.quiet:
            label = f"{algorithm.value.upper() + ':':<15}"
            if matches:
                print(f"✓ {label} MATCH |", file=out)
            else:
                print(f"✗ {label} DIFFERENT | {first[:16]} ≠ {second[:16]}", file=out)

    if not args.quiet:
        print(file=out)
        print(f"Results: {match_count} matches, {mismatch_count} mismatches", file=out)
        if mismatch_count == 0:
            print("✓ ALL ALGORITHMS MATCH - Inputs are identical", file=out)
        else:
            print("✗ MISMATCHES DETECTED - Inputs are different", file=out)

    return EXIT_OK if mismatch_count == 0 else EXIT_MISMATCH


def main(argv: t.Optional[t.Sequence[str]] = None, out: t.TextIO = None, err: t.TextIO = None) -> int:
    out = out or sys.stdout
    err = err or sys.stderr

    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=err,
        force=True,
    )

    if args.list_algorithms:
        list_algorithms(out)
        return EXIT_OK

    if args.input is None:
        parser.error("the following arguments are required: INPUT")

    try:
        if args.compare is not None:
            if args.all_algorithms:
                return compare_all_algorithms(args, out)
            return compare_single_algorithm(args, out)
        if args.all_algorithms:
            return process_all_algorithms(args, out)
        return process_single_algorithm(args, out, err)
    except (HashError, OSError) as exc:
        logger.debug("aborting", exc_info=True)
        print(f"error: {exc}", file=err)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
