#!/usr/bin/env python3
"""
Page Replacement Simulator
Reads a frame count, a policy name and a page reference string, then prints
the content of the frames after every reference and the number of page faults
"""

import argparse
import random
import sys
from typing import List, Optional, Sequence, TextIO

from replacement import PageReplacementSimulator, ReplacementPolicy

SENTINEL = -1
DEFAULT_PAGE_RANGE = 8
RULE = "-" * 37

class SimulationInput:
    """Frame count, policy name and reference string for one run"""

    def __init__(self, capacity: int, policy_name: str, pages: List[int]):
        self.capacity = capacity
        self.policy_name = policy_name
        self.pages = pages

    def __repr__(self):
        return (f"SimulationInput(capacity={self.capacity}, "
                f"policy_name={self.policy_name!r}, pages={self.pages})")

def _parse_int(token: str, what: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise ValueError(f"Invalid {what}: {token!r}") from None

def parse_pages(text: str) -> List[int]:
    """Parse whitespace-separated page numbers, stopping at the -1 sentinel"""
    pages = []
    for token in text.split():
        page = _parse_int(token, "page number")
        if page == SENTINEL:
            break
        if page < 0:
            raise ValueError(f"Page numbers must be non-negative, got {page}")
        pages.append(page)
    return pages

def parse_input(text: str) -> SimulationInput:
    """
    Parse the simulator input format:

        <number of frames>
        <policy name>
        <page> <page> ... -1
    """
    lines = text.splitlines()
    if not lines or not lines[0].strip():
        raise ValueError("Missing number of frames")

    first = lines[0].split()
    capacity = _parse_int(first[0], "number of frames")
    if capacity < 1:
        raise ValueError(f"Number of frames must be at least 1, got {capacity}")

    # The policy name is the first non-empty line after the frame count
    rest = [" ".join(first[1:])] + lines[1:]
    for i, line in enumerate(rest):
        if line.strip():
            policy_name = line.strip()
            pages = parse_pages("\n".join(rest[i + 1:]))
            return SimulationInput(capacity, policy_name, pages)

    raise ValueError("Missing replacement policy name")

def read_input(stream: TextIO) -> SimulationInput:
    """Read and parse the whole input stream"""
    return parse_input(stream.read())

def format_header(policy_name: str) -> str:
    """Title and column headings of the trace table"""
    return "\n".join([
        f"Replacement Policy = {policy_name}",
        RULE,
        "Page   Content of Frames",
        "----   -----------------",
    ])

def format_row(page: int, fault: bool, frames: Sequence[int]) -> str:
    """One trace line: page, fault marker, then the frame contents"""
    status = "F   " if fault else "    "
    contents = "".join(f"{frame:02d} " for frame in frames)
    return f"{page:02d} {status}{contents}"

def format_footer(page_faults: int) -> str:
    """Closing rule and total number of page faults"""
    return f"{RULE}\nNumber of page faults = {page_faults}"

class TraceWriter:
    """Prints the trace table; pass write_row as the emit callback of a run"""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream if stream is not None else sys.stdout

    def write_header(self, policy_name: str):
        print(format_header(policy_name), file=self.stream)

    def write_row(self, page: int, fault: bool, frames: List[int]):
        print(format_row(page, fault, frames), file=self.stream)

    def write_footer(self, page_faults: int):
        print(format_footer(page_faults), file=self.stream)

def generate_reference_string(length: int, page_range: int, locality_factor: float = 0.7,
                              seed: Optional[int] = None) -> List[int]:
    """Generate a page reference string with some locality of reference"""
    rng = random.Random(seed)
    reference_string = []
    current_page = rng.randint(0, page_range - 1)

    for _ in range(length):
        if rng.random() < locality_factor:
            # Stay in locality (within +/-2 pages)
            offset = rng.choice([-2, -1, 0, 1, 2])
            current_page = max(0, min(page_range - 1, current_page + offset))
        else:
            current_page = rng.randint(0, page_range - 1)
        reference_string.append(current_page)

    return reference_string

def simulate(config: SimulationInput, stream: Optional[TextIO] = None) -> int:
    """Run one policy and print its trace table, return the number of page faults"""
    # Resolve the policy first so a bad name produces no output at all
    policy = ReplacementPolicy.parse(config.policy_name)

    writer = TraceWriter(stream)
    writer.write_header(config.policy_name)
    result = PageReplacementSimulator.run(policy, config.pages, config.capacity,
                                          emit=writer.write_row)
    writer.write_footer(result.page_faults)
    return result.page_faults

def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line options"""
    parser = argparse.ArgumentParser(
        description="Page replacement simulator (FIFO, LRU, OPTIMAL, CLOCK)."
    )
    parser.add_argument("--input", "-i", type=str,
                        help="read frames, policy and pages from a file instead of stdin")
    parser.add_argument("--frames", "-f", type=int, help="number of physical frames")
    parser.add_argument("--policy", "-p", type=str, help="FIFO, LRU, OPTIMAL or CLOCK")
    parser.add_argument("--pages", type=str, help="space-separated page reference string")
    parser.add_argument("--random", "-r", type=int, metavar="N",
                        help="generate a random reference string of N pages")
    parser.add_argument("--page-range", type=int, default=DEFAULT_PAGE_RANGE,
                        help="number of distinct pages for --random")
    parser.add_argument("--seed", "-s", type=int, help="random seed for --random")
    parser.add_argument("--compare", "-c", action="store_true",
                        help="compare all policies instead of printing one trace")
    parser.add_argument("--plot", type=str, metavar="PATH",
                        help="save a plot of faults against number of frames")
    parser.add_argument("--max-frames", type=int, default=8,
                        help="largest number of frames to plot")
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser.parse_args(argv)

def load_config(args: argparse.Namespace, stdin: TextIO) -> SimulationInput:
    """Combine command-line options with the input file or stdin"""
    if args.random is not None:
        pages = generate_reference_string(args.random, args.page_range, seed=args.seed)
    elif args.pages is not None:
        pages = parse_pages(args.pages)
    else:
        pages = None

    needs_input = args.frames is None or pages is None or (
        args.policy is None and not args.compare)
    if needs_input:
        if args.input:
            with open(args.input, "r") as f:
                config = read_input(f)
        else:
            config = read_input(stdin)
    else:
        config = SimulationInput(args.frames, args.policy or "", pages)

    if args.frames is not None:
        if args.frames < 1:
            raise ValueError(f"Number of frames must be at least 1, got {args.frames}")
        config.capacity = args.frames
    if args.policy is not None:
        config.policy_name = args.policy
    if pages is not None:
        config.pages = pages

    # Reject a bad policy name even when --compare runs every policy
    if config.policy_name:
        ReplacementPolicy.parse(config.policy_name)
    return config

def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    try:
        config = load_config(args, sys.stdin)
        if args.verbose:
            print(f"Frames: {config.capacity}, References: {len(config.pages)}",
                  file=sys.stderr)

        if args.compare:
            import report
            results = report.compare_policies(config.pages, config.capacity,
                                              verbose=args.verbose)
            print(f"Reference String: {config.pages}")
            print(f"Number of Frames: {config.capacity}")
            print(report.format_comparison(results))
        else:
            simulate(config)

        if args.plot:
            import report
            capacities = list(range(1, args.max_frames + 1))
            report.plot_fault_curves(config.pages, capacities, args.plot)
            if args.verbose:
                print(f"Saved plot to {args.plot}", file=sys.stderr)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0

if __name__ == "__main__":
    sys.exit(main())
