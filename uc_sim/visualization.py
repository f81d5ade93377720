"""
Summary plot for a finished simulation.
"""

from pathlib import Path
from typing import List, Tuple, Union

import numpy as np

from .provenance import ProvenanceStep
from .registry import CNVRegistry


def plot_registry_summary(
    registry: CNVRegistry,
    steps: List[ProvenanceStep],
    save_path: Union[str, Path],
    figsize: Tuple[int, int] = (12, 5)
) -> Path:
    """
    Plot how many CNVs and provenance events each generation contributed.

    Creates a two-panel plot:
    - Distinct CNVs by the generation they were first seen in
    - Reconstructed history events by event generation, split into events
      at the target profile (depth 0) and ancestral events

    Args:
        registry: Finished registry
        steps: Reconstructed provenance steps
        save_path: Path to save PNG file
        figsize: Figure size (width, height) in inches

    Returns:
        Path to saved PNG file
    """
    import matplotlib
    matplotlib.use('Agg')
    import matplotlib.pyplot as plt

    save_path = Path(save_path)
    save_path.parent.mkdir(parents=True, exist_ok=True)

    cnv_counts = registry.generation_histogram()
    n_generations = len(cnv_counts)

    direct = np.zeros(n_generations + 1, dtype=int)
    ancestral = np.zeros(n_generations + 1, dtype=int)
    for step in steps:
        generation = step.event.generation
        if generation >= len(direct):
            continue
        if step.depth == 0:
            direct[generation] += 1
        else:
            ancestral[generation] += 1

    fig, (ax_cnvs, ax_events) = plt.subplots(1, 2, figsize=figsize)

    positions = np.arange(n_generations)
    ax_cnvs.bar(positions, cnv_counts, color='steelblue')
    ax_cnvs.set_xticks(positions)
    ax_cnvs.set_xlabel('First generation')
    ax_cnvs.set_ylabel('Distinct CNVs')
    ax_cnvs.set_title('CNVs by generation')

    event_positions = np.arange(1, n_generations + 1)
    ax_events.bar(event_positions, direct[1:], color='firebrick', label='Target profile')
    ax_events.bar(event_positions, ancestral[1:], bottom=direct[1:], color='orange', label='Ancestral')
    ax_events.set_xticks(event_positions)
    ax_events.set_xlabel('Event generation')
    ax_events.set_ylabel('Events')
    ax_events.set_title('Reconstructed histories')
    ax_events.legend()

    fig.tight_layout()
    fig.savefig(save_path, dpi=150)
    plt.close(fig)

    return save_path
