"""
CNV registry.

Accumulates every distinct sequence produced so far together with the
generation it was first seen in and the recombination events recorded as
producing it.
"""

from typing import Dict, Iterator, List, Optional

import numpy as np

from .data_models import RecombinationEvent, RegistryEntry


class CNVRegistry:
    """
    Insert-only map from sequence to RegistryEntry.

    Events hold the registry's own key strings as parents, so the keys are
    never replaced once inserted. Iteration is in sorted sequence order so
    that every traversal over the registry is reproducible.
    """

    def __init__(self):
        self._entries: Dict[str, RegistryEntry] = {}
        self._order: Optional[List[str]] = None

    @classmethod
    def from_reference(cls, sequence: str) -> "CNVRegistry":
        """
        Create a registry holding only the reference sequence.

        Args:
            sequence: Reference haplotype

        Returns:
            Registry with one generation-0 entry and no events
        """
        registry = cls()
        registry._entries[sequence] = RegistryEntry(first_generation=0)
        return registry

    def merge(self, batch: Dict[str, RegistryEntry]) -> int:
        """
        Merge one generation's findings using insert-if-absent.

        Entries already present are neither replaced nor augmented, so a
        sequence keeps the generation and events of its first discovery.

        Args:
            batch: Mapping of sequence to entry built during one generation

        Returns:
            Number of sequences added
        """
        added = 0
        for sequence in sorted(batch):
            if sequence not in self._entries:
                self._entries[sequence] = batch[sequence]
                added += 1

        if added:
            self._order = None
        return added

    def sequences(self) -> List[str]:
        """All known sequences in sorted order."""
        if self._order is None:
            self._order = sorted(self._entries)
        return list(self._order)

    def get(self, sequence: str) -> Optional[RegistryEntry]:
        return self._entries.get(sequence)

    def first_generation(self, sequence: str) -> int:
        """
        Generation a sequence was first seen in.

        Raises:
            KeyError: If the sequence is unknown
        """
        return self._entries[sequence].first_generation

    def events_for(self, sequence: str) -> List[RecombinationEvent]:
        """Events recorded for an exact sequence (empty if unknown)."""
        entry = self._entries.get(sequence)
        if entry is None:
            return []
        return list(entry.events)

    def items(self) -> Iterator[tuple[str, RegistryEntry]]:
        for sequence in self.sequences():
            yield sequence, self._entries[sequence]

    def total_events(self) -> int:
        """Number of events stored across all entries."""
        return sum(len(entry.events) for entry in self._entries.values())

    def generation_histogram(self) -> np.ndarray:
        """
        Count sequences by the generation they were first seen in.

        Returns:
            Array where index g holds the number of sequences first seen in
            generation g
        """
        generations = np.array(
            [entry.first_generation for entry in self._entries.values()], dtype=int
        )
        return np.bincount(generations, minlength=1)

    def __contains__(self, sequence: str) -> bool:
        return sequence in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.sequences())
