"""
Console front end for the page replacement simulator.

    python cli.py -n 3 -a all 7 0 1 2 0 3 0 4
    python cli.py            # prompts like the interactive menu

Prints the step-wise table and summary of each selected policy, and the
comparison table when every policy is run.
"""

import argparse
import sys
from typing import List, Optional

from engine import (
    MENU,
    Comparison,
    SimulationError,
    Trace,
    UnknownSelection,
    resolve_mode,
    run,
)
from utils import format_comparison, format_step_table, format_summary

BANNER = "\n".join([
    "=" * 53,
    "      Efficient Page Replacement Algorithm Simulator",
    "=" * 53,
])


def args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Page replacement simulator for FIFO, LRU, Optimal, LFU and Second Chance"
    )
    parser.add_argument("-n", "--frames", type=int, help="Number of frames")
    parser.add_argument("-a", "--alg", type=str,
                        help="Algorithm: fifo, lru, opt, lfu, sc or all (or menu number 1-6)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print the event log of each run")
    parser.add_argument("pages", nargs="*", type=int, help="Reference string (page numbers)")
    return parser.parse_args(argv)


def prompt(namespace: argparse.Namespace) -> argparse.Namespace:
    """Ask for whatever was not given on the command line."""
    if not namespace.pages:
        length = int(input("Enter length of reference string: "))
        print("Enter the reference string (space separated page numbers):")
        pages = [int(x) for x in input().split()]
        if length < 0 or len(pages) != length:
            raise ValueError(f"Expected {length} page numbers, got {len(pages)}")
        namespace.pages = pages
    if namespace.frames is None:
        namespace.frames = int(input("Enter number of frames: "))
    if namespace.alg is None:
        print("\nChoose an option:")
        for number, mode in MENU.items():
            label = "Run All & Compare" if number == len(MENU) else mode
            print(f"{number}. {label}")
        namespace.alg = input("Enter choice: ")
    return namespace


def render(outcome, verbose: bool = False) -> str:
    results = list(outcome.results.values()) if isinstance(outcome, Comparison) else [outcome]

    sections = [format_step_table(r) for r in results]
    if verbose:
        for r in results:
            sections.append(f"--- {r.policy} event log ---\n" + "\n".join(r.event_log))
    sections.extend(format_summary(r.summary) for r in results)
    if isinstance(outcome, Comparison):
        sections.append(format_comparison(outcome))
    return "\n\n".join(sections)


def main(argv: Optional[List[str]] = None) -> int:
    try:
        namespace = prompt(args(argv))
    except (ValueError, EOFError):
        print("Please enter valid integers")
        return 2

    try:
        mode = resolve_mode(namespace.alg)
        trace = Trace(namespace.pages, namespace.frames)
    except UnknownSelection:
        print("Invalid choice.")
        return 2
    except SimulationError as e:
        print(f"Error: {e}")
        return 2

    print(BANNER)
    print(render(run(trace, mode), verbose=namespace.verbose))
    return 0


if __name__ == "__main__":
    sys.exit(main())
