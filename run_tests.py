#!/usr/bin/env python3
"""
Test runner for the UC event simulator
"""

import unittest
import sys
from pathlib import Path

# Add current directory to path for imports
sys.path.append(str(Path(__file__).parent))

def run_all_tests():
    """Run all test modules"""
    loader = unittest.TestLoader()
    suite = loader.discover(str(Path(__file__).parent / "tests" / "test_uc_sim"))

    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)

    return result.wasSuccessful()


def run_integration_test():
    """Run a basic end-to-end simulation"""
    print("\n" + "=" * 50)
    print("INTEGRATION TEST")
    print("=" * 50)

    try:
        from uc_sim.orchestration import run_simulation

        target = "01215456"
        print(f"Simulating 2 generations towards {target}...")
        result = run_simulation(target, 2, verbose=False)

        print(f"CNVs found: {len(result.registry)}")
        print(f"Histories matching target profile: {result.history_count}")
        print(f"Provenance events: {len(result.steps)}")
        print(f"Exact matches: {result.exact_match_count()}")

        success = (
            result.history_count > 0 and
            result.exact_match_count() > 0 and
            len(result.steps) >= result.history_count
        )

        if success:
            print("✓ Integration test PASSED")
        else:
            print("✗ Integration test FAILED")

        return success

    except Exception as e:
        print(f"✗ Integration test FAILED: {e}")
        import traceback
        traceback.print_exc()
        return False


if __name__ == "__main__":
    print("Running UC Event Simulator Tests")
    print("=" * 60)

    print("Running unit tests...")
    unit_success = run_all_tests()

    integration_success = run_integration_test()

    print("\n" + "=" * 60)
    print("TEST SUMMARY")
    print("=" * 60)
    print(f"Unit tests: {'PASSED' if unit_success else 'FAILED'}")
    print(f"Integration test: {'PASSED' if integration_success else 'FAILED'}")

    overall_success = unit_success and integration_success
    print(f"Overall: {'PASSED' if overall_success else 'FAILED'}")

    sys.exit(0 if overall_success else 1)
