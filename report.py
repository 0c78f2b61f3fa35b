"""
Policy comparison
Runs every replacement policy on the same reference string and plots how the
number of faults changes with the number of frames
"""

from typing import Dict, List, Sequence, Union

import numpy as np
from matplotlib.figure import Figure

from replacement import PageReplacementSimulator, ReplacementPolicy, SimulationResult

def compare_policies(pages: Sequence[int], capacity: int,
                     verbose: bool = False) -> Dict[str, SimulationResult]:
    """Run all policies on pages with the given number of frames"""
    results = {}
    for policy in ReplacementPolicy:
        if verbose:
            print(f"--- Testing {policy.value} Algorithm ---")
        results[policy.value] = PageReplacementSimulator.run(policy, pages, capacity)
    return results

def fault_curve(policy: Union[ReplacementPolicy, str], pages: Sequence[int],
                capacities: Sequence[int]) -> np.ndarray:
    """Page faults (evictions) for each number of frames"""
    return np.array([PageReplacementSimulator.run(policy, pages, c).page_faults
                     for c in capacities], dtype=int)

def miss_curve(policy: Union[ReplacementPolicy, str], pages: Sequence[int],
               capacities: Sequence[int]) -> np.ndarray:
    """Misses (evictions plus fills) for each number of frames"""
    return np.array([PageReplacementSimulator.run(policy, pages, c).misses
                     for c in capacities], dtype=int)

def belady_anomalies(pages: Sequence[int], capacities: Sequence[int],
                     policy: Union[ReplacementPolicy, str] = ReplacementPolicy.FIFO) -> List[int]:
    """Capacities that miss more often than the capacity before them"""
    capacities = sorted(capacities)
    misses = miss_curve(policy, pages, capacities)
    increased = np.nonzero(np.diff(misses) > 0)[0] + 1
    return [capacities[i] for i in increased]

def format_comparison(results: Dict[str, SimulationResult]) -> str:
    lines = [
        "=== Algorithm Comparison Summary ===",
        f"{'Algorithm':<10} {'Page Faults':<12} {'Misses':<8} {'Fault Rate':<12}",
        "-" * 44,
    ]
    for name, result in results.items():
        lines.append(f"{name:<10} {result.page_faults:<12} {result.misses:<8} "
                     f"{result.fault_rate:<12.3f}")
    return "\n".join(lines)

def plot_fault_curves(pages: Sequence[int], capacities: Sequence[int], path: str):
    """Save a line plot of misses against number of frames for every policy"""
    capacities = sorted(capacities)
    # A bare Figure renders straight to file without touching the pyplot backend
    fig = Figure(figsize=(8, 5))
    ax = fig.subplots()
    for policy in ReplacementPolicy:
        ax.plot(capacities, miss_curve(policy, pages, capacities),
                marker="o", label=policy.value)

    ax.set_xlabel("Number of frames")
    ax.set_ylabel("Page misses")
    ax.set_title(f"Page replacement over {len(pages)} references")
    ax.set_xticks(capacities)
    ax.grid(True, alpha=0.3)
    ax.legend()
    fig.tight_layout()
    fig.savefig(path)
