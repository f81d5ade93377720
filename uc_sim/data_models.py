"""
Data models for the UC event simulator.

Core data structures representing chunk sequences, copy number profiles,
recombination events and registry entries.

A sequence is a plain ``str``: each character is one chunk of the reference
chromosome. For DUP4, for example, the reference is ``0123456`` and the
duplication haplotype is ``0121545456``.
"""

from dataclasses import dataclass, field
from typing import Tuple

import numpy as np


def profile_of(sequence: str) -> str:
    """
    Get the copy number profile of a sequence.

    Rather than counting chunks, a profile is represented as the sequence's
    symbols in sorted order, so two sequences with the same chunk counts have
    the same profile.

    Args:
        sequence: Chunk sequence

    Returns:
        Sorted sequence
    """
    return "".join(sorted(sequence))


def alphabet_run(first: str, last: str) -> str:
    """Return all symbols from first to last inclusive, in ascending order."""
    return "".join(chr(code) for code in range(ord(first), ord(last) + 1))


def copy_number_vector(sequence: str, alphabet: str) -> np.ndarray:
    """
    Count copies of each alphabet symbol in a sequence.

    Args:
        sequence: Chunk sequence
        alphabet: Ordered run of symbols to count (e.g. "0123456")

    Returns:
        Integer array with one count per alphabet symbol. Symbols outside
        the alphabet are not counted.
    """
    if not alphabet:
        return np.zeros(0, dtype=int)

    offsets = np.array([ord(c) - ord(alphabet[0]) for c in sequence], dtype=int)
    offsets = offsets[(offsets >= 0) & (offsets < len(alphabet))]
    return np.bincount(offsets, minlength=len(alphabet))


@dataclass(frozen=True)
class RecombinationEvent:
    """
    One unequal crossover between two chromosomes.

    The recombinant copies the left sequence up to (not including) pos1 and
    then the right sequence from pos2 onwards. The first and last chunks are
    flanking regions and are never broken, so both positions must be
    interior.

    Attributes:
        left: Left parent sequence (the registry's own key)
        pos1: Breakpoint in the left parent, 0 < pos1 < len(left)
        right: Right parent sequence (the registry's own key)
        pos2: Breakpoint in the right parent, 0 < pos2 < len(right)
        left_generation: Generation the left parent was first seen in
        right_generation: Generation the right parent was first seen in
    """
    left: str
    pos1: int
    right: str
    pos2: int
    left_generation: int = 0
    right_generation: int = 0

    def __post_init__(self):
        """Check both breakpoints are interior."""
        if not 0 < self.pos1 < len(self.left):
            raise ValueError(
                f"pos1={self.pos1} is not an interior breakpoint of '{self.left}'"
            )
        if not 0 < self.pos2 < len(self.right):
            raise ValueError(
                f"pos2={self.pos2} is not an interior breakpoint of '{self.right}'"
            )

    def generate(self) -> str:
        """Generate the recombinant sequence."""
        return self.left[:self.pos1] + self.right[self.pos2:]

    @property
    def generation(self) -> int:
        """Generation this event happens in (one after its younger parent)."""
        return max(self.left_generation, self.right_generation) + 1

    def left_with_breakpoint(self, marker: str = "|") -> str:
        return self.left[:self.pos1] + marker + self.left[self.pos1:]

    def right_with_breakpoint(self, marker: str = "|") -> str:
        return self.right[:self.pos2] + marker + self.right[self.pos2:]

    def junction(self) -> Tuple[str, str]:
        """
        Get the two chunks joined by this event.

        Returns:
            Tuple of (last chunk kept from left, first chunk kept from right)
        """
        return self.left[self.pos1 - 1], self.right[self.pos2]

    def parents(self) -> Tuple[str, str]:
        return self.left, self.right


@dataclass
class RegistryEntry:
    """
    Provenance stored for one distinct sequence.

    Attributes:
        first_generation: Generation the sequence was first produced in
            (0 for the reference). Never changes after insertion.
        events: Recombination events recorded as producing the sequence
    """
    first_generation: int
    events: list[RecombinationEvent] = field(default_factory=list)

    def is_root(self) -> bool:
        """True if no events are recorded (e.g. the reference sequence)."""
        return not self.events
