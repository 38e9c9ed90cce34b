"""Unit tests for grid synthesis and puzzle generation."""

import random

import pytest
from futoshiki.core.puzzle import NO_HINT
from futoshiki.core.relations import derive_relations, partition_relations
from futoshiki.generator import (
    Difficulty, DifficultyProfile, PuzzleGenerator, GenerationError, generate_puzzle, synthesize
)
from futoshiki.generator.generator import FULL_HINT_RANGE
from futoshiki.solvers import count_solutions


class TestSynthesizer:
    """Tests for complete grid synthesis."""

    def test_grid_is_solved(self):
        board = synthesize(random.Random(1))
        assert board.is_complete()
        assert board.is_solved()

    def test_units_hold_each_value_once(self):
        board = synthesize(random.Random(2))
        for i in range(9):
            assert sorted(board.get_row(i)) == list(range(1, 10))
            assert sorted(board.get_col(i)) == list(range(1, 10))
        for row in range(0, 9, 3):
            for col in range(0, 9, 3):
                assert sorted(board.get_box(row, col)) == list(range(1, 10))

    def test_seed_reproducible(self):
        assert synthesize(random.Random(7)) == synthesize(random.Random(7))

    def test_seeds_differ(self):
        assert synthesize(random.Random(7)) != synthesize(random.Random(8))


class TestDifficultyLevels:
    """Tests for the difficulty table."""

    def test_lookup_by_name(self):
        assert Difficulty.from_name("Hard") is Difficulty.HARD
        assert Difficulty.from_name("Pure") is Difficulty.PURE

    def test_unknown_name_falls_back(self):
        assert Difficulty.from_name("Impossible") is Difficulty.NORMAL
        # Names are case-sensitive
        assert Difficulty.from_name("hard") is Difficulty.NORMAL

    def test_hint_ranges_are_ordered(self):
        """Each harder level's max is below the easier level's min."""
        ordered = [Difficulty.EASY, Difficulty.NORMAL, Difficulty.HARD, Difficulty.EXPERT]
        for easier, harder in zip(ordered, ordered[1:]):
            assert harder.hint_range[1] < easier.hint_range[0]
            assert harder.profile.inter_block_keep_ratio < easier.profile.inter_block_keep_ratio

    def test_initial_reveals_within_range(self):
        for difficulty in Difficulty:
            low, high = difficulty.hint_range
            assert low <= high
            assert difficulty.profile.initial_reveals <= high

    def test_min_max_hints(self):
        profile = Difficulty.HARD.profile
        assert (profile.min_hints, profile.max_hints) == profile.hint_range
        assert Difficulty.PURE.profile.max_hints == 0

    def test_pure_profile(self):
        profile = Difficulty.PURE.profile
        assert profile.hint_range == (0, 0)
        assert profile.inter_block_keep_ratio == 1.0
        assert not profile.allow_fallback
        assert profile.max_attempts > Difficulty.NORMAL.profile.max_attempts


class TestPuzzleGenerator:
    """Tests for PuzzleGenerator class."""

    @pytest.mark.parametrize(
        "difficulty", [Difficulty.EASY, Difficulty.NORMAL, Difficulty.HARD, Difficulty.EXPERT]
    )
    def test_generated_puzzle_is_unique(self, difficulty):
        generator = PuzzleGenerator(seed=42)
        puzzle, solution = generator.generate_with_solution(difficulty)

        assert puzzle.difficulty == difficulty.value
        assert count_solutions(puzzle.grid, puzzle.relations, limit=2) == 1
        if not puzzle.relaxed:
            low, high = difficulty.hint_range
            assert low <= puzzle.hint_count <= high

    def test_expert_within_range(self):
        puzzle = PuzzleGenerator(seed=42).generate(Difficulty.EXPERT)

        assert not puzzle.relaxed
        assert puzzle.attempts <= Difficulty.EXPERT.profile.max_attempts
        assert 1 <= puzzle.hint_count <= 7
        assert count_solutions(puzzle.grid, puzzle.relations, limit=2) == 1

    def test_hints_match_solution(self):
        generator = PuzzleGenerator(seed=3)
        puzzle, solution = generator.generate_with_solution(Difficulty.EASY)

        assert solution.is_solved()
        for idx, hint in enumerate(puzzle.grid):
            if hint != NO_HINT:
                assert hint == solution[idx]

    def test_relations_selection(self):
        """All intra-block relations are kept, plus a share of the rest."""
        generator = PuzzleGenerator(seed=5)
        puzzle, solution = generator.generate_with_solution(Difficulty.NORMAL)

        intra, inter = partition_relations(derive_relations(solution))
        selected = set(puzzle.relations)
        assert set(intra) <= selected
        assert len(selected - set(intra)) == int(len(inter) * 0.45)
        assert all(relation.holds(solution) for relation in puzzle.relations)

    def test_seed_reproducible(self):
        first = PuzzleGenerator(seed=11).generate(Difficulty.EASY)
        second = PuzzleGenerator(seed=11).generate(Difficulty.EASY)
        assert first.grid == second.grid
        assert first.relations == second.relations

    def test_generate_batch(self):
        puzzles = PuzzleGenerator(seed=42).generate_batch(2, Difficulty.EASY)
        assert len(puzzles) == 2
        for puzzle in puzzles:
            assert count_solutions(puzzle.grid, puzzle.relations, limit=2) == 1

    def test_accepts_difficulty_name(self):
        puzzle = PuzzleGenerator(seed=9).generate("Easy")
        assert puzzle.difficulty == "Easy"

    def test_pure_has_no_hints(self):
        puzzle = PuzzleGenerator(seed=42).generate(Difficulty.PURE)

        assert puzzle.hint_count == 0
        assert len(puzzle.relations) == 144
        assert all(value == NO_HINT for value in puzzle.grid)
        assert count_solutions(puzzle.grid, puzzle.relations, limit=2) == 1

    def test_fallback_widens_hint_range(self, monkeypatch):
        """Exhausted ordinary levels get one attempt with the full range."""
        generator = PuzzleGenerator(seed=42, max_attempts=3)
        original = generator._attempt
        calls = []

        def strict_attempt(profile):
            calls.append(profile.hint_range)
            if profile.hint_range != FULL_HINT_RANGE:
                return None
            return original(profile)

        monkeypatch.setattr(generator, "_attempt", strict_attempt)
        puzzle = generator.generate(Difficulty.HARD)

        assert puzzle.relaxed
        assert puzzle.attempts == 4
        assert calls == [Difficulty.HARD.hint_range] * 3 + [FULL_HINT_RANGE]
        assert count_solutions(puzzle.grid, puzzle.relations, limit=2) == 1

    def test_pure_exhaustion_raises(self, monkeypatch):
        generator = PuzzleGenerator(seed=42, max_attempts=2)
        monkeypatch.setattr(generator, "_attempt", lambda profile: None)

        with pytest.raises(GenerationError):
            generator.generate(Difficulty.PURE)

    def test_zero_max_attempts_is_honoured(self, monkeypatch):
        generator = PuzzleGenerator(seed=42, max_attempts=0)
        calls = []
        monkeypatch.setattr(generator, "_attempt", lambda profile: calls.append(profile))

        with pytest.raises(GenerationError):
            generator.generate(Difficulty.PURE)
        assert calls == []


class TestAttempt:
    """Tests for a single generation attempt."""

    def test_reveal_over_budget_abandons(self, monkeypatch):
        monkeypatch.setattr("futoshiki.generator.generator.count_solutions",
                            lambda grid, relations, limit=2: 2)
        generator = PuzzleGenerator(seed=1)
        profile = DifficultyProfile(0.0, (0, 0), initial_reveals=0)

        assert generator._attempt(profile) is None

    def test_initial_reveals_over_budget_abandons(self):
        generator = PuzzleGenerator(seed=1)
        profile = DifficultyProfile(0.5, (0, 3), initial_reveals=5)

        assert generator._attempt(profile) is None

    def test_unique_below_min_hints_abandons(self, monkeypatch):
        monkeypatch.setattr("futoshiki.generator.generator.count_solutions",
                            lambda grid, relations, limit=2: 1)
        generator = PuzzleGenerator(seed=1)
        profile = DifficultyProfile(0.5, (5, 10), initial_reveals=0)

        assert generator._attempt(profile) is None

    def test_unique_within_range_is_kept(self, monkeypatch):
        monkeypatch.setattr("futoshiki.generator.generator.count_solutions",
                            lambda grid, relations, limit=2: 1)
        generator = PuzzleGenerator(seed=1)
        profile = DifficultyProfile(0.5, FULL_HINT_RANGE, initial_reveals=0)

        board, relations, solution = generator._attempt(profile)
        assert board.count_filled() == 0
        assert solution.is_solved()


class TestGeneratePuzzle:
    """Tests for the module-level entry point."""

    def test_unknown_difficulty_uses_normal(self):
        puzzle = generate_puzzle("whatever", seed=1)
        assert puzzle.difficulty == "Normal"

    def test_export_format(self):
        data = generate_puzzle("Easy", seed=2).to_dict()
        assert len(data["grid"]) == 81
        assert all(v == NO_HINT or 1 <= v <= 9 for v in data["grid"])
        assert all(set(c) == {"a", "b"} for c in data["constraints"])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
