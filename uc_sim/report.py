"""
Report writing.

Produces the tab-separated history table, plus the optional registry CSV
and YAML metadata sidecar.
"""

import csv
from pathlib import Path
from typing import Any, Dict, List, TextIO, Union

import yaml

from .data_models import alphabet_run, copy_number_vector
from .matchers import arrangement_match, profile_match
from .provenance import ProvenanceStep
from .registry import CNVRegistry


REPORT_COLUMNS = [
    'index', 'result', 'generation', 'left', 'right', 'break',
    'copy_number_profile_match', 'exact_match'
]

REGISTRY_COLUMNS = [
    'sequence', 'first_generation', 'recorded_events',
    'copy_number_profile_match', 'copy_numbers'
]


def build_report_rows(
    steps: List[ProvenanceStep],
    target: str,
    marker: str = "|"
) -> List[Dict[str, Any]]:
    """
    Turn provenance steps into report rows.

    Args:
        steps: Provenance steps in discovery order
        target: Target sequence
        marker: Breakpoint marker inserted into the parents

    Returns:
        One dictionary per step, keyed by REPORT_COLUMNS
    """
    rows = []
    for index, step in enumerate(steps):
        event = step.event
        child = event.generate()
        before, after = event.junction()
        rows.append({
            'index': index,
            'result': child,
            'generation': event.generation,
            'left': event.left_with_breakpoint(marker),
            'right': event.right_with_breakpoint(marker),
            'break': f"{before}{marker}{after}",
            'copy_number_profile_match': int(profile_match(child, target)),
            'exact_match': int(arrangement_match(child, target)),
        })
    return rows


def write_report(
    stream: TextIO,
    starting_sequence: str,
    target: str,
    generations: int,
    registry: CNVRegistry,
    history_count: int,
    steps: List[ProvenanceStep],
    marker: str = "|"
) -> int:
    """
    Write the full text report.

    Args:
        stream: Text stream to write to
        starting_sequence: Reference haplotype
        target: Target sequence
        generations: Number of generations simulated
        registry: Finished registry
        history_count: Number of events recorded for the target profile
        steps: Reconstructed provenance steps
        marker: Breakpoint marker

    Returns:
        Number of table rows written
    """
    stream.write("# simulate_uc_events\n")
    stream.write(f"# Starting sequence is: {starting_sequence}\n")
    stream.write(f"# Target is: {target}\n")
    stream.write(f"# Attempting to make target in {generations} generations.\n")
    stream.write(f"# After {generations} generations, a total of {len(registry)} CNVs are possible.\n")
    stream.write(
        f"# After {generations} generations, a total of {history_count} "
        f"histories match target copy number profile.\n"
    )

    writer = csv.DictWriter(
        stream, fieldnames=REPORT_COLUMNS, delimiter='\t', lineterminator='\n'
    )
    writer.writeheader()

    rows = build_report_rows(steps, target, marker)
    for row in rows:
        writer.writerow(row)

    return len(rows)


def save_registry_csv(
    registry: CNVRegistry,
    output_path: Union[str, Path],
    target: str,
    overwrite: bool = False
) -> Path:
    """
    Save every registry entry to CSV.

    Copy numbers are counted over the alphabet run from the target's first
    to last symbol and written space-separated.

    Args:
        registry: Finished registry
        output_path: Path for output CSV
        target: Target sequence
        overwrite: If True, overwrite existing file

    Returns:
        Path to saved CSV file

    Raises:
        FileExistsError: If file exists and overwrite=False
    """
    output_path = Path(output_path)

    if output_path.exists() and not overwrite:
        raise FileExistsError(f"Output file already exists: {output_path}")

    output_path.parent.mkdir(parents=True, exist_ok=True)

    alphabet = alphabet_run(target[0], target[-1])

    with open(output_path, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(REGISTRY_COLUMNS)

        for sequence, entry in registry.items():
            copy_numbers = copy_number_vector(sequence, alphabet)
            writer.writerow([
                sequence,
                entry.first_generation,
                len(entry.events),
                int(profile_match(sequence, target)),
                " ".join(str(n) for n in copy_numbers),
            ])

    return output_path


def save_metadata(
    metadata: dict,
    output_path: Union[str, Path],
    overwrite: bool = False
) -> Path:
    """
    Save run metadata to YAML sidecar file.

    Args:
        metadata: Metadata dictionary
        output_path: Path for output YAML
        overwrite: If True, overwrite existing file

    Returns:
        Path to saved metadata file

    Raises:
        FileExistsError: If file exists and overwrite=False
    """
    output_path = Path(output_path)

    if output_path.exists() and not overwrite:
        raise FileExistsError(f"Metadata file already exists: {output_path}")

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w') as f:
        yaml.dump(metadata, f, default_flow_style=False, sort_keys=False)

    return output_path
