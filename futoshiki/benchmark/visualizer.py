"""Visualization utilities for benchmark results."""

from __future__ import annotations
import os
from typing import List

import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from .benchmark import BenchmarkResult
from ..generator import Difficulty


class Visualizer:
    """
    Chart generator for generation benchmark results.

    Charts compare difficulties on generation time, hints and search effort.
    """

    COLORS = {
        "Easy": "#2ecc71",
        "Normal": "#3498db",
        "Hard": "#f39c12",
        "Expert": "#e74c3c",
        "Pure": "#9b59b6",
    }

    def __init__(self, results: List[BenchmarkResult], output_dir: str = "results"):
        """
        Initialize the visualizer.

        Args:
            results: List of benchmark results.
            output_dir: Directory to save generated charts.
        """
        self.results = results
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        plt.style.use('seaborn-v0_8-whitegrid')
        sns.set_palette("husl")

    def _difficulties(self) -> List[str]:
        # Table order rather than alphabetical.
        present = {r.difficulty for r in self.results}
        return [d.value for d in Difficulty if d.value in present]

    def _save(self, name: str) -> str:
        plt.tight_layout()
        path = os.path.join(self.output_dir, name)
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()
        return path

    def generate_all(self) -> List[str]:
        """
        Generate all charts.

        Returns:
            List of paths to generated chart files.
        """
        return [
            self.plot_generation_time(),
            self.plot_hint_distribution(),
            self.plot_search_effort(),
        ]

    def plot_generation_time(self) -> str:
        """Bar chart of average generation time per difficulty."""
        fig, ax = plt.subplots(figsize=(10, 6))

        difficulties = self._difficulties()
        avg_times = [
            np.mean([r.generation_seconds for r in self.results if r.difficulty == d])
            for d in difficulties
        ]
        colors = [self.COLORS.get(d, "#95a5a6") for d in difficulties]
        bars = ax.bar(difficulties, avg_times, color=colors, edgecolor='black', linewidth=0.5)

        for bar, seconds in zip(bars, avg_times):
            ax.annotate(f'{seconds:.3f}s',
                        xy=(bar.get_x() + bar.get_width() / 2, bar.get_height()),
                        xytext=(0, 3),
                        textcoords="offset points",
                        ha='center', va='bottom', fontsize=10)

        ax.set_xlabel('Difficulty', fontsize=12)
        ax.set_ylabel('Average Time (seconds)', fontsize=12)
        ax.set_title('Average Generation Time by Difficulty', fontsize=14, fontweight='bold')
        ax.set_ylim(bottom=0)

        return self._save("generation_time.png")

    def plot_hint_distribution(self) -> str:
        """Box plot of hint counts, with each difficulty's accepted range shaded."""
        fig, ax = plt.subplots(figsize=(12, 6))

        difficulties = self._difficulties()
        data = [
            [r.hints for r in self.results if r.difficulty == d and r.generated]
            for d in difficulties
        ]
        bp = ax.boxplot(data, patch_artist=True)
        ax.set_xticks(range(1, len(difficulties) + 1))
        ax.set_xticklabels(difficulties)

        for i, (patch, name) in enumerate(zip(bp['boxes'], difficulties), start=1):
            patch.set_facecolor(self.COLORS.get(name, "#95a5a6"))
            patch.set_alpha(0.7)
            low, high = Difficulty(name).hint_range
            ax.fill_between([i - 0.4, i + 0.4], low, high, color='gray', alpha=0.15)

        ax.set_xlabel('Difficulty', fontsize=12)
        ax.set_ylabel('Numeric Hints', fontsize=12)
        ax.set_title('Hint Count Distribution by Difficulty', fontsize=14, fontweight='bold')

        return self._save("hint_distribution.png")

    def plot_search_effort(self) -> str:
        """Bar chart of nodes explored when re-solving, log scale."""
        fig, ax = plt.subplots(figsize=(10, 6))

        difficulties = self._difficulties()
        avg_nodes = []
        for d in difficulties:
            nodes = [r.nodes_explored for r in self.results if r.difficulty == d and r.generated]
            avg_nodes.append(np.mean(nodes) if nodes else 0)

        colors = [self.COLORS.get(d, "#95a5a6") for d in difficulties]
        ax.bar(difficulties, avg_nodes, color=colors, edgecolor='black', linewidth=0.5)

        ax.set_xlabel('Difficulty', fontsize=12)
        ax.set_ylabel('Average Nodes Explored (Log Scale)', fontsize=12)
        ax.set_title('Search Effort to Confirm Uniqueness', fontsize=14, fontweight='bold')
        ax.set_yscale('log')

        return self._save("search_effort.png")

    def generate_summary_table(self) -> str:
        """Generate a markdown summary table."""
        lines = [
            "# Generation Benchmark Summary\n",
            "| Difficulty | Generated | Avg Hints | Avg Relations | Avg Attempts | Relaxed | Avg Time |",
            "|------------|-----------|-----------|---------------|--------------|---------|----------|"
        ]

        for name in self._difficulties():
            diff_results = [r for r in self.results if r.difficulty == name]
            generated = [r for r in diff_results if r.generated]
            avg_time = np.mean([r.generation_seconds for r in diff_results])
            if generated:
                avg_hints = np.mean([r.hints for r in generated])
                avg_relations = np.mean([r.relations for r in generated])
                avg_attempts = np.mean([r.attempts for r in generated])
            else:
                avg_hints = avg_relations = avg_attempts = 0.0
            relaxed = sum(1 for r in generated if r.relaxed)

            lines.append(
                f"| {name} | {len(generated)}/{len(diff_results)} | {avg_hints:.1f} | "
                f"{avg_relations:.1f} | {avg_attempts:.1f} | {relaxed} | {avg_time:.3f}s |"
            )

        path = os.path.join(self.output_dir, "benchmark_summary.md")
        with open(path, "w") as f:
            f.write("\n".join(lines))

        return path
