"""
Generation engine.

Breeds every pairwise recombinant of the known sequences, one generation at
a time, and merges the results into the registry.
"""

import sys
from typing import Dict, Optional

from .data_models import RecombinationEvent, RegistryEntry
from .errors import ConfigurationError
from .policies import RecordingPolicy, record_everything
from .registry import CNVRegistry

# Registry size grows combinatorially with every generation.
MAX_GENERATIONS = 3

DEFAULT_PROGRESS_INTERVAL = 1_000_000


def breed_generation(
    registry: CNVRegistry,
    policy: RecordingPolicy,
    generation: int,
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
    verbose: bool = True
) -> Dict[str, RegistryEntry]:
    """
    Compute one generation's batch of recombinants.

    Every ordered pair (left, right) of registry sequences, including a
    sequence paired with itself, is recombined at every pair of interior
    breakpoints. The registry is only read here, so sequences found in this
    generation are not paired until the next one.

    Args:
        registry: Registry as of the start of this generation
        policy: Decides which events are appended to a child's history
        generation: Number of the generation being computed (1-based)
        progress_interval: Report progress each time this many more
            distinct children have been found
        verbose: If False, print no progress

    Returns:
        Mapping of child sequence to RegistryEntry tagged with this generation
    """
    sequences = registry.sequences()
    batch: Dict[str, RegistryEntry] = {}
    next_report = progress_interval

    for left_count, left in enumerate(sequences):
        left_generation = registry.first_generation(left)

        for right in sequences:
            right_generation = registry.first_generation(right)

            for pos1 in range(1, len(left)):
                for pos2 in range(1, len(right)):
                    event = RecombinationEvent(
                        left, pos1, right, pos2,
                        left_generation=left_generation,
                        right_generation=right_generation
                    )
                    child = event.generate()

                    entry = batch.get(child)
                    if entry is None:
                        entry = batch[child] = RegistryEntry(first_generation=generation)

                    if policy(generation, child, entry.first_generation):
                        entry.events.append(event)

                    if verbose and len(batch) >= next_report:
                        print(
                            f"Looked at {left_count} of {len(sequences)} CNVs on left.  "
                            f"({len(batch)} CNVs and counting...)",
                            file=sys.stderr
                        )
                        next_report += progress_interval

    return batch


def advance(
    registry: CNVRegistry,
    policy: RecordingPolicy,
    generation: int,
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
    verbose: bool = True
) -> CNVRegistry:
    """
    Add one further generation to the registry.

    Args:
        registry: Registry to extend (modified in place)
        policy: Recording policy
        generation: Number of the generation being computed (1-based)
        progress_interval: See breed_generation
        verbose: If False, print no progress

    Returns:
        The same registry, now including this generation's new sequences
    """
    if verbose:
        print(f"Computing CNVs in generation {generation}...", file=sys.stderr)

    batch = breed_generation(registry, policy, generation, progress_interval, verbose)
    registry.merge(batch)

    if verbose:
        print(f"After generation {generation}: {len(registry)} haplotypes.", file=sys.stderr)

    return registry


def generate_cnvs(
    registry: CNVRegistry,
    n_generations: int,
    policy: Optional[RecordingPolicy] = None,
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
    verbose: bool = True
) -> CNVRegistry:
    """
    Run generations 1..n_generations over the registry.

    Args:
        registry: Starting registry (usually just the reference sequence)
        n_generations: Number of generations to simulate, at most MAX_GENERATIONS
        policy: Recording policy (default: record every event)
        progress_interval: See breed_generation
        verbose: If False, print no progress

    Returns:
        The extended registry

    Raises:
        ConfigurationError: If n_generations is negative or above MAX_GENERATIONS
    """
    if n_generations > MAX_GENERATIONS:
        raise ConfigurationError(
            f"More than {MAX_GENERATIONS} generations requested ({n_generations}); "
            f"the number of CNVs grows too fast to compute"
        )
    if n_generations < 0:
        raise ConfigurationError(f"Number of generations must be non-negative, got: {n_generations}")

    if policy is None:
        policy = record_everything

    for generation in range(1, n_generations + 1):
        advance(registry, policy, generation, progress_interval, verbose)

    return registry
