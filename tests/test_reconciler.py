"""Tests for the follower/following reciprocity sets."""

import random

from follow_graph.analysis.reconciler import reconcile

from conftest import entities


class TestReconcile:

    def test_example(self):
        result = reconcile(entities(("a", 100)), entities(("a", 100), ("b", 200)))
        assert list(result.not_following_back) == entities(("b", 200))
        assert list(result.not_followed_back) == []
        assert result.mutual == {"a"}

    def test_identical_collections(self):
        same = entities(("a", 1), ("b", 2), ("c", 3))
        result = reconcile(same, list(same))
        assert result.not_following_back == ()
        assert result.not_followed_back == ()
        assert result.mutual_count == 3

    def test_empty_inputs(self):
        result = reconcile([], [])
        assert result.not_following_back == ()
        assert result.not_followed_back == ()

    def test_event_time_is_ignored(self):
        result = reconcile(entities(("a", 1)), entities(("a", 999)))
        assert result.not_following_back == ()
        assert result.not_followed_back == ()

    def test_identifiers_are_case_sensitive(self):
        result = reconcile(entities(("Alice", 1)), entities(("alice", 1)))
        assert [e.identifier for e in result.not_following_back] == ["alice"]
        assert [e.identifier for e in result.not_followed_back] == ["Alice"]

    def test_source_order_and_duplicates_preserved(self):
        following = entities(("z", 1), ("m", 2), ("x", 3), ("z", 4), ("a", 5))
        followers = entities(("m", 9))
        result = reconcile(followers, following)
        assert [e.identifier for e in result.not_following_back] == ["z", "x", "z", "a"]

    def test_matches_definition_on_random_input(self):
        rng = random.Random(7)
        names = [f"user{i}" for i in range(40)]
        followers = entities(*[(rng.choice(names), rng.randint(0, 10**9)) for _ in range(60)])
        following = entities(*[(rng.choice(names), rng.randint(0, 10**9)) for _ in range(60)])

        result = reconcile(followers, following)
        follower_ids = {e.identifier for e in followers}
        following_ids = {e.identifier for e in following}
        assert list(result.not_following_back) == [e for e in following if e.identifier not in follower_ids]
        assert list(result.not_followed_back) == [e for e in followers if e.identifier not in following_ids]

    def test_repeatable(self):
        followers = entities(("a", 1), ("b", 2))
        following = entities(("b", 3), ("c", 4))
        assert reconcile(followers, following) == reconcile(followers, following)
