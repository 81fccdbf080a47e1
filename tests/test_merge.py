"""Tests for merging recommendation sources."""

from conftest import make_content

from src.services.recommendations.merge import merge_recommendations


def ids(items):
    return [item.id for item in items]


class TestMergeRecommendations:
    def test_round_robin_with_dedup(self):
        """Test round robin with dedup."""
        sources = [[make_content(1), make_content(2)], [make_content(2), make_content(3)]]
        assert ids(merge_recommendations(sources, 3)) == [1, 2, 3]

    def test_interleaves_sources(self):
        """Test interleaves sources."""
        sources = [
            [make_content(1), make_content(2), make_content(3)],
            [make_content(10), make_content(20)],
        ]
        assert ids(merge_recommendations(sources, 10)) == [1, 10, 2, 20, 3]

    def test_respects_limit(self):
        """Test respects limit."""
        sources = [[make_content(i) for i in range(10)], [make_content(i) for i in range(10, 20)]]
        assert ids(merge_recommendations(sources, 3)) == [0, 10, 1]

    def test_iteration_bound(self):
        """Test the merge stops after limit times sources steps."""
        # One long source, one empty: only limit * 2 steps are taken
        sources = [[make_content(i) for i in range(10)], []]
        assert ids(merge_recommendations(sources, 4)) == [0, 1, 2, 3]

    def test_duplicates_reduce_output(self):
        """Test duplicates reduce output."""
        sources = [[make_content(1), make_content(1), make_content(1)]]
        assert ids(merge_recommendations(sources, 3)) == [1]

    def test_empty(self):
        """Test merging nothing."""
        assert merge_recommendations([], 5) == []
        assert merge_recommendations([[], []], 5) == []
        assert merge_recommendations([[make_content(1)]], 0) == []
