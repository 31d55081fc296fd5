"""
Tests for referral tree builder.

Covers root detection, depth bound, ordering and behaviour on
malformed relation data (dangling referrers, cycles, bad levels).
"""

import pytest

from referral_tree import TreeBuilder, build_tree, flatten_tree, iter_with_depth


def ids(nodes) -> list[str]:
    return [node.node_id for node in nodes]


class TestBuildBasic:
    """Tests for well-formed input."""

    def test_concrete_scenario(self, builder, sample_entries) -> None:
        """u1 -> [u2 -> [u4], u3]."""
        tree = builder.build(sample_entries)

        assert ids(tree) == ["u1"]
        root = tree[0]
        assert ids(root.children) == ["u2", "u3"]
        assert ids(root.children[0].children) == ["u4"]
        assert root.children[1].children == []

    def test_empty_entries(self, builder) -> None:
        """Empty input gives empty forest."""
        assert builder.build([]) == []

    def test_every_entry_appears_once(self, builder, wide_entries) -> None:
        """Forest property on well-formed input within depth."""
        tree = builder.build(wide_entries, max_depth=6)

        built_ids = ids(flatten_tree(tree))
        assert sorted(built_ids) == sorted(e.id for e in wide_entries)
        assert len(built_ids) == len(set(built_ids))

    def test_children_keep_input_order(self, builder, entry_factory) -> None:
        """Children are attached in input order, not sorted."""
        entries = [
            entry_factory("root", None, 1),
            entry_factory("zed", "root", 2),
            entry_factory("amy", "root", 2),
            entry_factory("mia", "root", 2),
        ]
        tree = builder.build(entries)

        assert ids(tree[0].children) == ["zed", "amy", "mia"]

    def test_multiple_roots_in_input_order(self, builder, wide_entries) -> None:
        """Each level 1 entry becomes a root."""
        tree = builder.build(wide_entries)

        assert ids(tree) == ["r1", "r2"]
        assert ids(tree[1].children) == ["c2"]

    def test_input_not_mutated(self, builder, sample_entries) -> None:
        """Build does not modify entries list."""
        snapshot = list(sample_entries)
        builder.build(sample_entries)
        assert sample_entries == snapshot

    def test_build_tree_shortcut(self, sample_entries) -> None:
        """Module-level shortcut matches builder output."""
        tree = build_tree(sample_entries, max_depth=5)
        assert ids(flatten_tree(tree)) == ["u1", "u2", "u4", "u3"]


class TestRootDetection:
    """Tests for root fallback."""

    def test_fallback_to_unresolved_referrer(self, entry_factory) -> None:
        """Without level 1 entries, roots are entries with unknown referrer."""
        entries = [
            entry_factory("a", None, None),
            entry_factory("b", "owner-123", None),
            entry_factory("c", "a", None),
        ]
        roots = TreeBuilder.find_roots(entries)

        assert ids_of(roots) == ["a", "b"]

    def test_fallback_builds_children(self, builder, entry_factory) -> None:
        """Entries without level still attach under fallback roots."""
        entries = [
            entry_factory("a", None, None),
            entry_factory("c", "a", None),
            entry_factory("d", "c", None),
        ]
        tree = builder.build(entries)

        assert ids(tree) == ["a"]
        assert ids(tree[0].children) == ["c"]
        assert ids(tree[0].children[0].children) == ["d"]

    def test_level_one_wins_over_fallback(self, entry_factory) -> None:
        """Dangling referrers are not roots when level 1 entries exist."""
        entries = [
            entry_factory("a", None, 1),
            entry_factory("orphan", "missing", 2),
        ]
        assert ids_of(TreeBuilder.find_roots(entries)) == ["a"]


def ids_of(entries) -> list[str]:
    return [e.id for e in entries]


class TestDepthBound:
    """Tests for max_depth handling."""

    @pytest.mark.parametrize("max_depth", [1, 2, 3, 5])
    def test_no_node_deeper_than_max_depth(self, builder, wide_entries, max_depth) -> None:
        """Effective depth never exceeds max_depth."""
        tree = builder.build(wide_entries, max_depth=max_depth)

        depths = [depth for _, depth in iter_with_depth(tree)]
        assert max(depths) <= max_depth

    def test_max_depth_one_gives_roots_only(self, builder, wide_entries) -> None:
        """Depth 1 keeps only the roots."""
        tree = builder.build(wide_entries, max_depth=1)

        assert ids(tree) == ["r1", "r2"]
        assert all(not root.children for root in tree)

    def test_default_depth_cuts_level_six(self, builder, wide_entries) -> None:
        """Level 6 entry is left out at max_depth 5."""
        tree = builder.build(wide_entries)

        assert "a6" not in ids(flatten_tree(tree))
        assert "a5" in ids(flatten_tree(tree))

    def test_invalid_max_depth_raises(self, builder, sample_entries) -> None:
        """max_depth below 1 is a caller error."""
        with pytest.raises(ValueError):
            builder.build(sample_entries, max_depth=0)

    def test_constructor_default_used(self, sample_entries) -> None:
        """Depth from constructor applies when build() gets none."""
        tree = TreeBuilder(max_depth=2).build(sample_entries)
        assert ids(flatten_tree(tree)) == ["u1", "u2", "u3"]

    def test_noisy_levels_still_bounded(self, builder, entry_factory) -> None:
        """Chain with constant level 2 is bounded by effective depth."""
        entries = [entry_factory("n0", None, 1)]
        entries += [
            entry_factory(f"n{i}", f"n{i - 1}", 2) for i in range(1, 10)
        ]
        tree = builder.build(entries, max_depth=4)

        assert ids(flatten_tree(tree)) == ["n0", "n1", "n2", "n3"]

    def test_reported_level_shortens_branch(self, builder, entry_factory) -> None:
        """Child reporting a deeper level stops descent earlier."""
        entries = [
            entry_factory("a", None, 1),
            entry_factory("b", "a", 5),
            entry_factory("c", "b", 6),
        ]
        tree = builder.build(entries, max_depth=5)

        assert ids(tree[0].children) == ["b"]
        assert tree[0].children[0].children == []


class TestMalformedInput:
    """Tests for cycles and dangling references."""

    def test_three_cycle_terminates(self, builder, entry_factory, log_messages) -> None:
        """A -> B -> C -> A builds without looping and drops the back edge."""
        entries = [
            entry_factory("A", "C", 1),
            entry_factory("B", "A", 2),
            entry_factory("C", "B", 3),
        ]
        tree = builder.build(entries)

        assert ids(flatten_tree(tree)) == ["A", "B", "C"]
        assert tree[0].children[0].children[0].children == []
        assert "Referral cycle detected, edge skipped" in log_messages

    def test_cycle_without_roots_gives_empty_forest(self, builder, entry_factory) -> None:
        """Pure cycle with no level data has no roots."""
        entries = [
            entry_factory("A", "C", None),
            entry_factory("B", "A", None),
            entry_factory("C", "B", None),
        ]
        assert builder.build(entries) == []

    def test_self_referral_skipped(self, builder, entry_factory) -> None:
        """Entry referring itself is not attached under itself."""
        entries = [entry_factory("A", "A", 1)]
        tree = builder.build(entries)

        assert ids(tree) == ["A"]
        assert tree[0].children == []

    def test_dangling_referrer_omitted(self, builder, sample_entries, entry_factory) -> None:
        """Entry pointing at unknown ID is left out."""
        entries = sample_entries + [entry_factory("ghost", "nobody", 2)]
        tree = builder.build(entries)

        assert "ghost" not in ids(flatten_tree(tree))

    def test_level_beyond_max_depth_omitted(self, builder, entry_factory) -> None:
        """Child with out-of-range level is skipped with its branch."""
        entries = [
            entry_factory("a", None, 1),
            entry_factory("b", "a", 9),
            entry_factory("c", "b", 2),
        ]
        tree = builder.build(entries)

        assert ids(flatten_tree(tree)) == ["a"]


class TestStrictLevels:
    """Tests for strict level mode."""

    def test_strict_skips_inconsistent_level(self, entry_factory) -> None:
        """Child must report parent depth + 1."""
        entries = [
            entry_factory("a", None, 1),
            entry_factory("b", "a", 2),
            entry_factory("c", "a", 3),
        ]
        strict = TreeBuilder(max_depth=5, strict_levels=True).build(entries)
        tolerant = TreeBuilder(max_depth=5, strict_levels=False).build(entries)

        assert ids(strict[0].children) == ["b"]
        assert ids(tolerant[0].children) == ["b", "c"]

    def test_strict_matches_tolerant_on_clean_data(self, sample_entries) -> None:
        """Consistent levels give same tree in both modes."""
        strict = TreeBuilder(max_depth=5, strict_levels=True).build(sample_entries)
        tolerant = TreeBuilder(max_depth=5, strict_levels=False).build(sample_entries)

        assert [n.to_dict() for n in strict] == [n.to_dict() for n in tolerant]
