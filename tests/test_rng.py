"""Tests for the rng module."""

from duty_randomizer.rng import create_generator, shuffle


class TestCreateGenerator:
    """Test cases for the seeded generator."""

    def test_same_seed_same_sequence(self):
        """Test that two generators with the same seed agree."""
        first = create_generator(20250101)
        second = create_generator(20250101)

        assert [first() for _ in range(100)] == [second() for _ in range(100)]

    def test_different_seeds_differ(self):
        """Test that different seeds give different sequences."""
        first = create_generator(42)
        second = create_generator(43)

        assert [first() for _ in range(10)] != [second() for _ in range(10)]

    def test_known_first_value(self):
        """Test the first xorshift step for seed 1."""
        draw = create_generator(1)
        assert draw() == 270369 / 2 ** 32

    def test_values_in_unit_interval(self):
        """Test that every value lies in [0, 1)."""
        draw = create_generator(987654321)
        for _ in range(1000):
            value = draw()
            assert 0.0 <= value < 1.0

    def test_zero_seed_is_degenerate(self):
        """Test that seed 0 produces only zeros."""
        draw = create_generator(0)
        assert [draw() for _ in range(5)] == [0.0] * 5

    def test_seed_truncated_to_32_bits(self):
        """Test that seeds wrap around at 32 bits."""
        wrapped = create_generator(2 ** 32 + 1)
        plain = create_generator(1)
        assert [wrapped() for _ in range(10)] == [plain() for _ in range(10)]

    def test_negative_seed(self):
        """Test that negative seeds use their 32-bit two's complement."""
        negative = create_generator(-1)
        unsigned = create_generator(2 ** 32 - 1)
        assert [negative() for _ in range(10)] == [unsigned() for _ in range(10)]

    def test_timestamp_sized_seed(self):
        """Test that millisecond timestamps are accepted as seeds."""
        draw = create_generator(1700000000000)
        assert 0.0 <= draw() < 1.0


class TestShuffle:
    """Test cases for the Fisher-Yates shuffle."""

    def test_keeps_all_elements(self):
        """Test that shuffling neither drops nor duplicates elements."""
        items = [f"P{i}" for i in range(20)]
        result = shuffle(items, create_generator(7))

        assert sorted(result) == sorted(items)
        assert len(result) == len(items)

    def test_does_not_modify_input(self):
        """Test that the input list is left untouched."""
        items = ["A", "B", "C", "D"]
        shuffle(items, create_generator(7))
        assert items == ["A", "B", "C", "D"]

    def test_deterministic(self):
        """Test that the same seed gives the same order."""
        items = list("ABCDEFGH")
        assert shuffle(items, create_generator(5)) == shuffle(items, create_generator(5))

    def test_zero_draws_rotate_left(self):
        """Test the swap order: all-zero draws rotate the list left by one."""
        assert shuffle(["A", "B", "C", "D"], create_generator(0)) == ["B", "C", "D", "A"]

    def test_short_lists_consume_no_draws(self):
        """Test that empty and single-item lists do not advance the generator."""
        used = create_generator(99)
        fresh = create_generator(99)

        assert shuffle([], used) == []
        assert shuffle(["A"], used) == ["A"]
        assert used() == fresh()
