#!/usr/bin/env python3
"""
UC Event Simulator CLI - Minimal entry point.

Usage:
    python3 simulate_uc_events.py <target> <number of generations>
    python3 simulate_uc_events.py --config run_config.yaml
    python3 simulate_uc_events.py --help

Examples:
    # Histories of the DUP4 copy number profile within 2 generations
    python3 simulate_uc_events.py 01215456 2

    # Same, with report, registry and plot written to files
    python3 simulate_uc_events.py --config examples/dup4_run.yaml
"""

import sys
from pathlib import Path

# Add project root to path if needed
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


if __name__ == '__main__':
    from uc_sim.cli import main
    main()
