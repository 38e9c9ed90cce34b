"""Command-line interface for the inequality Sudoku generator."""

import argparse
import json
import logging
import sys

from tqdm import tqdm

from .core.board import Board
from .core.puzzle import Puzzle
from .core.validator import is_valid_board, validate_solution, violated_relations
from .generator import PuzzleGenerator, Difficulty, GenerationError
from .solvers import PropagationSolver

DIFFICULTY_CHOICES = [d.value for d in Difficulty] + ["all"]


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Inequality Sudoku Puzzle Generator & Solver",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate 5 Hard puzzles into a JSON file
  python -m futoshiki.cli generate --count 5 --difficulty Hard --output puzzles.json

  # Solve the first puzzle of that file
  python -m futoshiki.cli solve --puzzle puzzles.json

  # Run the generation benchmark
  python -m futoshiki.cli benchmark --puzzles 10 --output results/
        """
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    gen_parser = subparsers.add_parser("generate", help="Generate puzzles")
    gen_parser.add_argument(
        "--count", "-n", type=int, default=1,
        help="Number of puzzles to generate (default: 1)"
    )
    gen_parser.add_argument(
        "--difficulty", "-d",
        choices=DIFFICULTY_CHOICES,
        default="Normal",
        help="Difficulty level (default: Normal)"
    )
    gen_parser.add_argument(
        "--output", "-o", type=str, default=None,
        help="Output file for puzzles (JSON format)"
    )
    gen_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducibility"
    )
    gen_parser.add_argument(
        "--show-solution", action="store_true",
        help="Print the solution under each puzzle"
    )

    solve_parser = subparsers.add_parser("solve", help="Solve a puzzle from a JSON file")
    solve_parser.add_argument(
        "--puzzle", "-p", type=str, required=True,
        help="JSON file holding a puzzle or a list of puzzles"
    )
    solve_parser.add_argument(
        "--index", "-i", type=int, default=0,
        help="Which puzzle of a list to solve (default: 0)"
    )

    check_parser = subparsers.add_parser("check", help="Check a proposed solution")
    check_parser.add_argument(
        "--puzzle", "-p", type=str, required=True,
        help="JSON file holding a puzzle or a list of puzzles"
    )
    check_parser.add_argument(
        "--index", "-i", type=int, default=0,
        help="Which puzzle of a list to check against (default: 0)"
    )
    check_parser.add_argument(
        "--solution", type=str, required=True,
        help="Solution string (81 digits)"
    )

    bench_parser = subparsers.add_parser("benchmark", help="Benchmark puzzle generation")
    bench_parser.add_argument(
        "--puzzles", "-n", type=int, default=10,
        help="Puzzles per difficulty (default: 10)"
    )
    bench_parser.add_argument(
        "--difficulty", "-d",
        choices=DIFFICULTY_CHOICES,
        default="all",
        help="Difficulty to benchmark (default: all)"
    )
    bench_parser.add_argument(
        "--output", "-o", type=str, default="results",
        help="Output directory for results (default: results)"
    )
    bench_parser.add_argument(
        "--seed", "-s", type=int, default=42,
        help="Random seed for reproducibility (default: 42)"
    )
    bench_parser.add_argument(
        "--no-charts", action="store_true",
        help="Skip chart generation"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        level=logging.DEBUG if args.verbose else logging.WARNING
    )

    if args.command is None:
        parser.print_help()
        return 1

    commands = {
        "generate": cmd_generate,
        "solve": cmd_solve,
        "check": cmd_check,
        "benchmark": cmd_benchmark,
    }
    try:
        return commands[args.command](args)
    except (ValueError, OSError, GenerationError) as e:
        print(f"Error: {e}")
        return 1


def _difficulties(name):
    if name == "all":
        return list(Difficulty)
    return [Difficulty(name)]


def _load_puzzle(path, index):
    with open(path) as f:
        data = json.load(f)
    if isinstance(data, list):
        if not 0 <= index < len(data):
            raise ValueError(f"{path} holds {len(data)} puzzles, no index {index}")
        data = data[index]
    return Puzzle.from_dict(data)


def cmd_generate(args):
    """Handle the generate command."""
    generator = PuzzleGenerator(seed=args.seed)
    all_puzzles = []

    for difficulty in _difficulties(args.difficulty):
        print(f"\nGenerating {args.count} {difficulty.value} puzzle(s)...")
        for i in tqdm(range(1, args.count + 1), desc=difficulty.value, disable=args.count < 2):
            puzzle, solution = generator.generate_with_solution(difficulty)
            all_puzzles.append(puzzle.to_dict())

            note = " (hint range relaxed)" if puzzle.relaxed else ""
            print(f"\n--- {difficulty.value} Puzzle {i} "
                  f"({puzzle.hint_count} hints, {len(puzzle.relations)} relations){note} ---")
            print(puzzle.render())
            if args.show_solution:
                print("\nSolution:")
                print(puzzle.render(solution.to_cells()))

    if args.output:
        with open(args.output, "w") as f:
            json.dump(all_puzzles, f, indent=2)
        print(f"\nAll puzzles saved to {args.output}")

    print(f"\nTotal puzzles generated: {len(all_puzzles)}")
    return 0


def cmd_solve(args):
    """Handle the solve command."""
    puzzle = _load_puzzle(args.puzzle, args.index)

    print("Input puzzle:")
    print(puzzle.render())
    print()

    solver = PropagationSolver(limit=2)
    solution, stats = solver.solve(puzzle.to_board(), puzzle.relations)

    if not stats.solved:
        print("✗ No solution")
        return 1

    uniqueness = "unique" if stats.solutions == 1 else "not unique"
    print(f"✓ Solved in {stats.time_seconds:.4f}s ({uniqueness}, "
          f"{stats.nodes_explored:,} nodes, {stats.backtracks:,} backtracks)")
    print(puzzle.render(solution.to_cells()))
    return 0


def cmd_check(args):
    """Handle the check command."""
    puzzle = _load_puzzle(args.puzzle, args.index)
    board = Board.from_string(args.solution)

    if not board.is_complete():
        print("Incomplete!")
        return 1

    if validate_solution(puzzle, board):
        print("Correct!")
        return 0

    print("Incorrect!")
    if not is_valid_board(board):
        print("  Sudoku rules violated")
    broken = violated_relations(board, puzzle.relations)
    if broken:
        print(f"  {len(broken)} relation(s) violated")
    return 1


def cmd_benchmark(args):
    """Handle the benchmark command."""
    from .benchmark import GenerationBenchmark, Visualizer

    difficulties = _difficulties(args.difficulty)

    print("=" * 60)
    print("PUZZLE GENERATION BENCHMARK")
    print("=" * 60)
    print(f"Puzzles per difficulty: {args.puzzles}")
    print(f"Difficulties: {[d.value for d in difficulties]}")
    print(f"Output directory: {args.output}")
    print("=" * 60)

    benchmark = GenerationBenchmark(
        puzzles_per_difficulty=args.puzzles,
        difficulties=difficulties,
        seed=args.seed
    )
    results = benchmark.run()
    summary = benchmark.get_summary()

    print("\nBy Difficulty:")
    print("-" * 50)
    for name, stats in summary["results_by_difficulty"].items():
        print(f"\n{name}:")
        print(f"  Generated: {stats['generated']}/{stats['tested']}")
        print(f"  Avg Time: {stats['avg_generation_seconds']:.4f}s")
        if stats["generated"]:
            print(f"  Hints: {stats['min_hints']}-{stats['max_hints']} (avg {stats['avg_hints']:.1f})")
            print(f"  Avg Attempts: {stats['avg_attempts']:.1f}, relaxed: {stats['relaxed']}")

    benchmark.save_results(args.output)

    if not args.no_charts:
        print("\nGenerating charts...")
        visualizer = Visualizer(results, args.output)
        charts = visualizer.generate_all()
        visualizer.generate_summary_table()
        print(f"Charts saved to {args.output}/")
        for chart in charts:
            print(f"  - {chart.split('/')[-1]}")

    print("\n" + "=" * 60)
    print("Benchmark complete!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
