"""
Orchestration module for the UC event simulator.

Runs a complete simulation: build the reference, breed generations,
reconstruct histories of the target and write the requested outputs.
"""

import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO

from .data_models import alphabet_run
from .engine import DEFAULT_PROGRESS_INTERVAL, generate_cnvs
from .errors import InvalidTargetError
from .matchers import arrangement_match
from .policies import build_policy
from .provenance import ProvenanceStep, histories_for_profile, reconstruct_provenance
from .registry import CNVRegistry
from .report import save_metadata, save_registry_csv, write_report


@dataclass
class SimulationResult:
    """
    Everything a finished run produced.

    Attributes:
        starting_sequence: Reference haplotype the run started from
        target: Target sequence
        generations: Number of generations simulated
        registry: Every CNV found, with recorded histories
        history_count: Number of events recorded for the target profile
        steps: Reconstructed provenance of the target profile
    """
    starting_sequence: str
    target: str
    generations: int
    registry: CNVRegistry
    history_count: int
    steps: List[ProvenanceStep]

    def exact_match_count(self) -> int:
        """Number of provenance steps producing the target arrangement itself."""
        return sum(1 for step in self.steps if arrangement_match(step.event.generate(), self.target))

    def summary(self) -> Dict[str, Any]:
        return {
            'starting_sequence': self.starting_sequence,
            'target': self.target,
            'generations': self.generations,
            'cnvs': len(self.registry),
            'recorded_events': self.registry.total_events(),
            'histories_matching_profile': self.history_count,
            'provenance_events': len(self.steps),
            'exact_matches': self.exact_match_count(),
        }


OUTPUT_KEYS = ('report', 'registry', 'metadata', 'plot')


def validate_target(target: str) -> List[str]:
    """
    Check a target sequence can define a reference haplotype.

    Args:
        target: Target sequence

    Returns:
        List of warnings (problems that don't stop the run)

    Raises:
        InvalidTargetError: If the target is shorter than 2 chunks, or its
            first chunk is not strictly less than its last
    """
    if len(target) < 2:
        raise InvalidTargetError("Target should have at least 2 elements")

    if target[0] >= target[-1]:
        raise InvalidTargetError(
            "Target first char should be less than last char (suggest using 0....n)"
        )

    warnings = []
    if min(target) != target[0] or max(target) != target[-1]:
        warnings.append(
            "Target should contain only characters between the first and last (suggest using 0....n)"
        )
    return warnings


def starting_sequence(target: str) -> str:
    """
    Build the reference haplotype for a target.

    The reference is every chunk from the target's first (leftmost) to its
    last (rightmost) chunk, in ascending order.
    """
    return alphabet_run(target[0], target[-1])


def check_output_paths(output: Dict[str, Any]) -> None:
    """
    Refuse to start if any configured output file already exists.

    Args:
        output: The 'output' section of a run configuration

    Raises:
        FileExistsError: If an output exists and output.overwrite is not set
    """
    if output.get('overwrite', False):
        return

    for key in OUTPUT_KEYS:
        if output.get(key) and Path(output[key]).exists():
            raise FileExistsError(
                f"Output file already exists: {output[key]}\n"
                f"Set 'output.overwrite: true' in config (or pass --overwrite) to overwrite"
            )


def run_simulation(
    target: str,
    generations: int,
    policy_name: str = "default",
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
    verbose: bool = True
) -> SimulationResult:
    """
    Simulate UC events from the reference and reconstruct the target's histories.

    Args:
        target: Target sequence
        generations: Number of generations to simulate
        policy_name: Recording policy name (see policies.build_policy)
        progress_interval: Progress reporting interval in distinct CNVs
        verbose: If False, print no progress

    Returns:
        SimulationResult

    Raises:
        InvalidTargetError: If the target cannot define a reference haplotype
        ConfigurationError: If the generation count or policy is invalid
    """
    validate_target(target)

    reference = starting_sequence(target)
    policy = build_policy(policy_name, target, generations)

    registry = CNVRegistry.from_reference(reference)
    generate_cnvs(registry, generations, policy, progress_interval, verbose)

    history_count = len(histories_for_profile(registry, target))
    steps = reconstruct_provenance(registry, target)

    return SimulationResult(
        starting_sequence=reference,
        target=target,
        generations=generations,
        registry=registry,
        history_count=history_count,
        steps=steps
    )


def run_from_config(run_config: Dict[str, Any], stream: Optional[TextIO] = None) -> SimulationResult:
    """
    Run a simulation and write every output the configuration asks for.

    The report goes to output.report if set, otherwise to stream (default:
    stdout). Registry CSV, metadata YAML and summary plot are written only
    when their paths are configured. Existing outputs are detected before
    any simulation work starts.

    Args:
        run_config: Validated run configuration (see config module)
        stream: Stream for the report when no report path is configured

    Returns:
        SimulationResult

    Raises:
        FileExistsError: If an output exists and output.overwrite is not set
    """
    if stream is None:
        stream = sys.stdout

    verbose = not run_config.get('quiet', False)
    output = run_config['output']
    overwrite = output.get('overwrite', False)
    marker = run_config['breakpoint_marker']

    check_output_paths(output)

    result = run_simulation(
        run_config['target'],
        run_config['generations'],
        policy_name=run_config['policy'],
        progress_interval=run_config['progress_interval'],
        verbose=verbose
    )

    report_args = (
        result.starting_sequence, result.target, result.generations,
        result.registry, result.history_count, result.steps
    )

    if output.get('report'):
        report_path = Path(output['report'])
        report_path.parent.mkdir(parents=True, exist_ok=True)
        with open(report_path, 'w', newline='') as f:
            write_report(f, *report_args, marker=marker)
        if verbose:
            print(f"Report: {report_path}", file=sys.stderr)
    else:
        write_report(stream, *report_args, marker=marker)

    if output.get('registry'):
        path = save_registry_csv(result.registry, output['registry'], result.target, overwrite)
        if verbose:
            print(f"Registry: {path}", file=sys.stderr)

    if output.get('metadata'):
        metadata = result.summary()
        metadata['policy'] = run_config['policy']
        metadata['timestamp'] = datetime.now().isoformat()
        path = save_metadata(metadata, output['metadata'], overwrite)
        if verbose:
            print(f"Metadata: {path}", file=sys.stderr)

    if output.get('plot'):
        from .visualization import plot_registry_summary
        path = plot_registry_summary(result.registry, result.steps, output['plot'])
        if verbose:
            print(f"Plot: {path}", file=sys.stderr)

    return result
