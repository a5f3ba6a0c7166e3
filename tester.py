#!/usr/bin/env python3
"""
Fibonacci Function Tester
Checks each Fibonacci function against the lookup table at a random index,
then benchmarks every function that produced the right value.
"""

import sys
import time
import random
import argparse
import statistics
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import numpy as np

import fiblib

# --- Configuration ---
THRESHOLD_MS = 30000.0  # Warn (once) when a single call takes at least this long
BATCH_RUNS = 1          # Timed calls per function
EXIT_PROMPT = "Exit program? y/n"

# --- Colors (ANSI escape codes) ---
GREEN = '\033[0;32m'
BLUE = '\033[0;34m'
YELLOW = '\033[1;33m'
RED = '\033[0;31m'
MAGENTA = '\033[0;35m'  # For threshold notices
NC = '\033[0m' # No Color

# Box drawing characters
T_DOWN = '┬'
T_UP = '┴'
T_CROSS = '┼'
L_VERT = '│'
L_HORZ = '─'
C_TL = '┌'
C_TR = '┐'
C_BL = '└'
C_BR = '┘'
T_LEFT = '├'
T_RIGHT = '┤'


def print_color(color, text):
    """Prints text in the specified color and flushes stdout."""
    print(f"{color}{text}{NC}", flush=True)


@dataclass(frozen=True)
class NamedFunction:
    """A Fibonacci function paired with the name used in reports."""

    name: str
    function: Callable[[int], int]

    def __call__(self, n):
        return self.function(n)


@dataclass(frozen=True)
class BenchmarkResult:
    name: str
    elapsed_ms: Optional[float]
    times: Tuple[float, ...] = ()
    skipped: bool = False


# All the functions to go here, in the order they are tested and benchmarked
FUNCTIONS = (
    NamedFunction("get_single_recursive", fiblib.get_single_recursive),
    NamedFunction("get_single_iterative", fiblib.get_single_iterative),
    NamedFunction("get_single_lookup", fiblib.get_single_lookup),
)


def console_confirm(prompt, read=input):
    """Asks a yes/no question on the console. Returns True for yes.

    Only the first non-blank character of the answer counts. Blank lines are
    skipped; anything other than y/n is rejected and the question is asked
    again.
    """
    while True:
        print(prompt, flush=True)
        response = ''
        while not response:
            try:
                response = read().strip()[:1]
            except EOFError:
                # Nobody left to answer
                return True
        if response in ('Y', 'y'):
            return True
        if response in ('N', 'n'):
            print("Continuing with operations.", flush=True)
            return False
        print_color(RED, "Invalid input.")


def always_continue(prompt):
    """Non-interactive confirm: never exits."""
    return False


def request_exit(confirm):
    """Terminates the process with exit code 0 if the operator confirms."""
    if confirm(EXIT_PROMPT):
        print_color(YELLOW, "Exiting program...")
        sys.exit(0)


def pick_index(table_size, rng=random):
    """Draws a random 8-bit index and reduces it into the table's range."""
    return rng.randrange(fiblib.INDEX_LIMIT) % table_size


def perform_tests(functions, n,
                  table=fiblib.LOOKUP_TABLE, confirm=console_confirm):
    """Runs every function at n and compares it with table[n].

    Returns the names of the functions that produced a different value (or
    raised). The operator is asked whether to exit after each failure.
    """
    expected = int(table[n])
    failed_funcs_names = set()

    for tester in functions:
        try:
            mismatch = tester(n) != expected
            error = None
        except Exception as e:
            mismatch = True
            error = e

        if mismatch:
            if error is not None:
                print_color(RED, f"{tester.name}({n}) failed. ({type(error).__name__}: {error})")
            else:
                print_color(RED, f"{tester.name}({n}) failed.")
            request_exit(confirm)
            failed_funcs_names.add(tester.name)
        else:
            print_color(GREEN, f"{tester.name}({n}) succeeded.")

    print("All functions have been tested.", flush=True)
    if failed_funcs_names:
        print_color(RED, "The following functions failed:")
        # Keep definition order in the listing
        ordered = [f.name for f in functions if f.name in failed_funcs_names]
        print(", ".join(ordered), flush=True)
    print(flush=True)

    return failed_funcs_names


def time_call(tester, n):
    """Returns how long one call took, in milliseconds."""
    start_time = time.perf_counter()
    tester(n)
    end_time = time.perf_counter()
    return (end_time - start_time) * 1000.0


def report_stats(name, times):
    """Prints min/max/avg/median (and percentiles with enough samples)."""
    min_time = min(times)
    max_time = max(times)
    avg_time = sum(times) / len(times)
    median_time = statistics.median(times)
    if len(times) > 5:
        p90_time = np.percentile(times, 90)
        p95_time = np.percentile(times, 95)
        print_color(YELLOW, f"{name} Times (ms): Min: {min_time:.5f}, Max: {max_time:.5f}, Avg: {avg_time:.5f}, Med: {median_time:.5f}, P90: {p90_time:.5f}, P95: {p95_time:.5f}")
    else:
        print_color(YELLOW, f"{name} Times (ms): Min: {min_time:.5f}, Max: {max_time:.5f}, Avg: {avg_time:.5f}, Median: {median_time:.5f}")


def perform_benchmarks(functions, failed_funcs_names, n,
                       confirm=console_confirm, threshold_ms=THRESHOLD_MS,
                       runs=BATCH_RUNS):
    """Times every function that is not in failed_funcs_names, in order."""
    if runs < 1:
        raise ValueError(f"runs must be at least 1, got {runs}")

    results = []
    show_threshold_notice = True

    for tester in functions:
        if tester.name in failed_funcs_names:
            print_color(YELLOW, f"{tester.name}({n}) was not benchmarked, because it failed during testing.")
            results.append(BenchmarkResult(tester.name, None, skipped=True))
            continue

        first_ms = time_call(tester, n)
        times = [first_ms]
        print_color(GREEN, f"{tester.name}({n}) executed at {first_ms:.5f}ms.")

        over_threshold = first_ms >= threshold_ms
        if over_threshold and show_threshold_notice:
            print_color(MAGENTA, f"{tester.name}({n}) is taking longer than the threshold ({threshold_ms}ms).")
            request_exit(confirm)
            show_threshold_notice = False

        # Slow functions only get the one run
        if runs > 1 and not over_threshold:
            for _ in range(runs - 1):
                times.append(time_call(tester, n))
            report_stats(tester.name, times)

        elapsed_ms = sum(times) / len(times)
        results.append(BenchmarkResult(tester.name, elapsed_ms, tuple(times)))

    print("All functions have been benchmarked.", flush=True)
    return results


def print_summary(results, n):
    """Prints the benchmark results as a table, in definition order."""
    col_name_width = 24
    col_time_width = 14
    col_stats_width = 36
    total_width = col_name_width + col_time_width + col_stats_width + 6

    print_color(BLUE, "===== Benchmark Summary =====")
    print(f"{C_TL}{L_HORZ*total_width}{C_TR}", flush=True)
    print(f"{L_VERT}{f' Fibonacci Function Benchmark Results (n = {n}) ':^{total_width}}{L_VERT}", flush=True)
    print(f"{T_LEFT}{L_HORZ*col_name_width}{T_DOWN}{L_HORZ*(col_time_width+2)}{T_DOWN}{L_HORZ*(col_stats_width+2)}{T_RIGHT}", flush=True)
    print(f"{L_VERT} {'Function':<{col_name_width-2}} {L_VERT} {'Time (ms)':^{col_time_width}} {L_VERT} {'Stats (min/median/max)':^{col_stats_width}} {L_VERT}", flush=True)
    print(f"{T_LEFT}{L_HORZ*col_name_width}{T_CROSS}{L_HORZ*(col_time_width+2)}{T_CROSS}{L_HORZ*(col_stats_width+2)}{T_RIGHT}", flush=True)

    skipped = []
    for result in results:
        if result.skipped:
            skipped.append(result.name)
            continue
        time_value = f"{result.elapsed_ms:.5f}"
        if len(result.times) > 1:
            stats = f"{min(result.times):.5f}/{statistics.median(result.times):.5f}/{max(result.times):.5f}"
        else:
            time_value += "*"
            stats = "N/A (single run)"
        print(f"{L_VERT} {result.name:<{col_name_width-2}} {L_VERT} {time_value:>{col_time_width}} {L_VERT} {stats:^{col_stats_width}} {L_VERT}", flush=True)

    print(f"{C_BL}{L_HORZ*col_name_width}{T_UP}{L_HORZ*(col_time_width+2)}{T_UP}{L_HORZ*(col_stats_width+2)}{C_BR}", flush=True)
    print("* function only ran once", flush=True)

    if skipped:
        print_color(RED, "--- Not Benchmarked ---")
        for name in skipped:
            print(f"  {RED}* {name:<{col_name_width}}: FAILED during testing{NC}", flush=True)


def list_functions(functions):
    """List available functions"""
    print_color(BLUE, "Available functions:")
    for tester in functions:
        print(f"  {tester.name}", flush=True)


def build_parser():
    parser = argparse.ArgumentParser(description='Fibonacci Function Tester')
    parser.add_argument('function', nargs='?', help='Test and benchmark only this function')
    parser.add_argument('--list', action='store_true', help='List available functions')
    parser.add_argument('--n', type=int, help='Use this index instead of a random one')
    parser.add_argument('--seed', type=int, help='Seed for the random index')
    parser.add_argument('--runs', type=int, default=BATCH_RUNS, help='Timed calls per function')
    parser.add_argument('--threshold', type=float, default=THRESHOLD_MS,
                        help='Warn once when a call takes at least this many milliseconds')
    parser.add_argument('--yes', action='store_true', help='Never prompt; always continue')
    return parser


def main(argv=None, functions=FUNCTIONS, table=fiblib.LOOKUP_TABLE, confirm=None):
    """Main function to run the tests and benchmarks."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list:
        list_functions(functions)
        return 0

    if args.runs < 1:
        parser.error("--runs must be at least 1")
    if args.n is not None and not 0 <= args.n < len(table):
        parser.error(f"--n must be between 0 and {len(table) - 1}")

    if confirm is None:
        confirm = always_continue if args.yes else console_confirm

    if args.function:
        selected = [f for f in functions if f.name == args.function]
        if not selected:
            print_color(RED, f"Function '{args.function}' not found")
            list_functions(functions)
            return 1
        functions = selected

    print_color(BLUE, "===== Fibonacci Function Tester =====")

    # Get the random value of the day
    if args.n is not None:
        n = args.n
    else:
        n = pick_index(len(table), random.Random(args.seed))
    print(f"The random number 'n' today is {n}.\n", flush=True)

    # First thing, test if all functions operate properly, and collect failures
    failed_funcs_names = perform_tests(functions, n, table=table, confirm=confirm)

    # Now we do benchmarks on every function
    results = perform_benchmarks(functions, failed_funcs_names, n, confirm=confirm,
                                 threshold_ms=args.threshold, runs=args.runs)

    print_summary(results, n)
    print_color(BLUE, "===== Benchmark Complete =====")
    return 0


if __name__ == "__main__":
    sys.exit(main())
