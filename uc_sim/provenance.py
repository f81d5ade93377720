"""
Provenance reconstruction.

Walks the registry backwards from the sequences matching a target copy
number profile, collecting every recorded event that contributed to them
directly or through their parents.
"""

from collections import deque
from dataclasses import dataclass
from typing import List

from .data_models import RecombinationEvent
from .matchers import profile_match
from .registry import CNVRegistry


@dataclass(frozen=True)
class ProvenanceStep:
    """
    One event in a reconstructed history.

    Attributes:
        event: The recombination event
        depth: Number of recombinations between this event's child and a
            sequence matching the target profile (0 for events producing
            the target profile directly)
    """
    event: RecombinationEvent
    depth: int


def histories_for_profile(registry: CNVRegistry, target: str) -> List[RecombinationEvent]:
    """
    Get the events recorded for every sequence with the target copy number profile.

    Args:
        registry: Finished registry
        target: Target sequence (only its profile is used)

    Returns:
        Events in registry order
    """
    histories = []
    for sequence, entry in registry.items():
        if profile_match(sequence, target):
            histories.extend(entry.events)
    return histories


def histories_for_arrangement(registry: CNVRegistry, sequence: str) -> List[RecombinationEvent]:
    """Get the events recorded for an exact arrangement (empty if not present)."""
    return registry.events_for(sequence)


def reconstruct_provenance(registry: CNVRegistry, target: str) -> List[ProvenanceStep]:
    """
    Recover every recorded event leading to the target copy number profile.

    Breadth-first worklist over the implicit graph "event has parent
    sequence". A parent's own events are expanded the first time the parent
    is seen; sequences with no events (the reference) end a branch. Every
    sequence matching the target profile starts out seen, so each event is
    emitted at most once.

    Args:
        registry: Finished registry
        target: Target sequence

    Returns:
        Steps in discovery order
    """
    seen = {sequence for sequence in registry if profile_match(sequence, target)}
    worklist = deque(
        (event, 0) for event in histories_for_profile(registry, target)
    )

    steps = []
    while worklist:
        event, depth = worklist.popleft()
        steps.append(ProvenanceStep(event, depth))

        for parent in event.parents():
            if parent in seen:
                continue
            seen.add(parent)
            worklist.extend(
                (parent_event, depth + 1)
                for parent_event in histories_for_arrangement(registry, parent)
            )

    return steps
