"""
Recording policies for the generation engine.

A policy decides whether a recombination event is stored in the history of
the sequence it produces. Storing every event for every sequence quickly
exhausts memory, so the production policy keeps only what is needed to
reconstruct histories of the target:

- every event producing the target copy number profile, and
- events producing brand new sequences, except in the final generation
  (those sequences are never recombined again).

All policies share the signature
``policy(generation, candidate, candidate_first_generation) -> bool``.
"""

from typing import Callable, Dict

from .data_models import profile_of
from .errors import ConfigurationError

RecordingPolicy = Callable[[int, str, int], bool]


def record_everything(generation: int, candidate: str, candidate_first_generation: int) -> bool:
    """Always record. Only practical for small state spaces."""
    return True


def earliest_generation(generation: int, candidate: str, candidate_first_generation: int) -> bool:
    """Record only while the candidate is in its first generation of existence."""
    return generation == candidate_first_generation


def matches_target_profile(target: str) -> RecordingPolicy:
    """
    Build a policy recording every event whose child has the target profile.

    Args:
        target: Target sequence (or profile)

    Returns:
        Recording policy
    """
    target_profile = profile_of(target)

    def policy(generation: int, candidate: str, candidate_first_generation: int) -> bool:
        return profile_of(candidate) == target_profile

    return policy


def is_frontier_and_not_final(total_generations: int) -> RecordingPolicy:
    """
    Build a policy recording events for new sequences before the last generation.

    Args:
        total_generations: Number of generations the run will simulate

    Returns:
        Recording policy
    """
    def policy(generation: int, candidate: str, candidate_first_generation: int) -> bool:
        return generation == candidate_first_generation and generation < total_generations

    return policy


def any_policy(*policies: RecordingPolicy) -> RecordingPolicy:
    """Combine policies with logical OR."""
    def policy(generation: int, candidate: str, candidate_first_generation: int) -> bool:
        return any(p(generation, candidate, candidate_first_generation) for p in policies)

    return policy


def production_policy(target: str, total_generations: int) -> RecordingPolicy:
    """Policy used for normal runs: target profile OR frontier-and-not-final."""
    return any_policy(
        matches_target_profile(target),
        is_frontier_and_not_final(total_generations),
    )


POLICY_NAMES = ("default", "everything", "earliest_generation", "target_profile", "frontier")


def build_policy(name: str, target: str, total_generations: int) -> RecordingPolicy:
    """
    Look up a recording policy by its configuration name.

    Args:
        name: One of POLICY_NAMES
        target: Target sequence
        total_generations: Number of generations the run will simulate

    Returns:
        Recording policy

    Raises:
        ConfigurationError: If the name is unknown
    """
    builders: Dict[str, Callable[[], RecordingPolicy]] = {
        "default": lambda: production_policy(target, total_generations),
        "everything": lambda: record_everything,
        "earliest_generation": lambda: earliest_generation,
        "target_profile": lambda: matches_target_profile(target),
        "frontier": lambda: is_frontier_and_not_final(total_generations),
    }

    if name not in builders:
        raise ConfigurationError(
            f"Unknown recording policy: '{name}'. Must be one of: {', '.join(POLICY_NAMES)}"
        )

    return builders[name]()
