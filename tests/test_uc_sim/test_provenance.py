"""
Tests for provenance reconstruction.
"""

import unittest

from uc_sim.data_models import RecombinationEvent, RegistryEntry
from uc_sim.registry import CNVRegistry
from uc_sim.engine import generate_cnvs
from uc_sim.matchers import profile_match
from uc_sim.policies import production_policy, record_everything
from uc_sim.provenance import (
    histories_for_profile,
    histories_for_arrangement,
    reconstruct_provenance,
)


def build_shared_parent_registry():
    """
    Registry where both histories of the target share the parent "0112".

    012 (gen 0) -> 0112 (gen 1) -> 01112 (gen 2, two events)
    """
    registry = CNVRegistry.from_reference("012")
    dup = RecombinationEvent("012", 2, "012", 1)
    registry.merge({"0112": RegistryEntry(first_generation=1, events=[dup])})

    via_reference = RecombinationEvent("0112", 3, "012", 1, left_generation=1)
    via_self = RecombinationEvent("0112", 2, "0112", 1, left_generation=1, right_generation=1)
    registry.merge({
        "01112": RegistryEntry(first_generation=2, events=[via_reference, via_self])
    })
    return registry, dup, via_reference, via_self


class TestHistoryQueries(unittest.TestCase):
    """Test profile and arrangement history lookups."""

    def setUp(self):
        self.registry, self.dup, self.via_reference, self.via_self = build_shared_parent_registry()

    def test_histories_for_profile(self):
        histories = histories_for_profile(self.registry, "01112")
        self.assertEqual(histories, [self.via_reference, self.via_self])

        # Only the profile matters
        self.assertEqual(histories_for_profile(self.registry, "21110"), histories)

    def test_histories_for_profile_no_match(self):
        self.assertEqual(histories_for_profile(self.registry, "0122"), [])

    def test_histories_for_arrangement(self):
        self.assertEqual(histories_for_arrangement(self.registry, "0112"), [self.dup])
        self.assertEqual(histories_for_arrangement(self.registry, "012"), [])
        self.assertEqual(histories_for_arrangement(self.registry, "0221"), [])


class TestReconstructProvenance(unittest.TestCase):
    """Test the backward worklist traversal."""

    def test_shared_parent_expanded_once(self):
        registry, dup, via_reference, via_self = build_shared_parent_registry()

        steps = reconstruct_provenance(registry, "01112")

        self.assertEqual(
            [step.event for step in steps],
            [via_reference, via_self, dup]
        )
        self.assertEqual([step.depth for step in steps], [0, 0, 1])

    def test_reference_only(self):
        registry = CNVRegistry.from_reference("012")
        self.assertEqual(reconstruct_provenance(registry, "012"), [])

    def test_no_matching_profile(self):
        registry = CNVRegistry.from_reference("012")
        generate_cnvs(registry, 1, record_everything, verbose=False)

        self.assertEqual(reconstruct_provenance(registry, "01122"), [])

    def test_single_duplication(self):
        registry = CNVRegistry.from_reference("012")
        generate_cnvs(registry, 1, production_policy("0112", 1), verbose=False)

        steps = reconstruct_provenance(registry, "0112")

        self.assertEqual(len(steps), 1)
        self.assertEqual(steps[0].event, RecombinationEvent("012", 2, "012", 1))
        self.assertEqual(steps[0].event.generation, 1)

    def test_two_generation_history(self):
        """DUP4-like target needs two generations of recombination."""
        target = "01215456"
        registry = CNVRegistry.from_reference("0123456")
        generate_cnvs(registry, 2, production_policy(target, 2), verbose=False)

        steps = reconstruct_provenance(registry, target)
        events = [step.event for step in steps]

        # Each event is emitted at most once
        self.assertEqual(len(events), len(set(events)))

        final = RecombinationEvent(
            "012123456", 4, "012345456", 5, left_generation=1, right_generation=1
        )
        self.assertIn(final, events)
        self.assertEqual(final.generate(), target)

        # Both parents of the final event are explained at depth 1
        depth_one_children = {step.event.generate() for step in steps if step.depth == 1}
        self.assertIn("012123456", depth_one_children)
        self.assertIn("012345456", depth_one_children)

        for step in steps:
            if step.depth == 0:
                self.assertTrue(profile_match(step.event.generate(), target))

    def test_depth_follows_discovery_order(self):
        target = "01215456"
        registry = CNVRegistry.from_reference("0123456")
        generate_cnvs(registry, 2, production_policy(target, 2), verbose=False)

        depths = [step.depth for step in reconstruct_provenance(registry, target)]
        self.assertEqual(depths, sorted(depths))


if __name__ == '__main__':
    unittest.main()
