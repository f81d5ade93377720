"""
Unequal Crossover (UC) Event Simulator

This package enumerates every chromosome rearrangement reachable from a
reference haplotype by a bounded number of generations of unequal
crossover, and reconstructs every recorded history producing a target
copy number profile.

Key Features:
- Exhaustive enumeration (no probabilities, no fitness)
- Memory-bounded history recording via pluggable policies
- Breadth-first provenance reconstruction of the target profile
- Tab-separated report, optional registry CSV, YAML metadata and plot

Modules:
- data_models: Core data structures (RecombinationEvent, RegistryEntry, profiles)
- registry: Insert-only store of every CNV found
- matchers: Profile and arrangement matching
- policies: History recording policies
- engine: Generation engine
- provenance: Provenance reconstruction
- report: Report, registry CSV and metadata writers
- config: Run configuration loading and validation
- orchestration: Complete simulation runs
- visualization: Summary plot
- cli: Command-line interface
"""

__version__ = "0.1.0"
__author__ = "UC Simulation Team"

from .data_models import RecombinationEvent, RegistryEntry, profile_of
from .registry import CNVRegistry
from .engine import advance, generate_cnvs, MAX_GENERATIONS
from .provenance import ProvenanceStep, reconstruct_provenance

__all__ = [
    "RecombinationEvent",
    "RegistryEntry",
    "profile_of",
    "CNVRegistry",
    "advance",
    "generate_cnvs",
    "MAX_GENERATIONS",
    "ProvenanceStep",
    "reconstruct_provenance",
]
