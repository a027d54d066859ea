"""Visualization utilities for benchmark results."""

from __future__ import annotations
import os
from typing import List

import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from .benchmark import BenchmarkResult


class Visualizer:
    """
    Chart generator for strategy benchmark results.
    """

    COLORS = {
        "early-exit": "#2ecc71",  # Green
        "full-scan": "#9b59b6",   # Purple
    }
    DEFAULT_COLOR = "#95a5a6"

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

    @property
    def strategies(self) -> List[str]:
        return sorted(set(r.strategy for r in self.results))

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
            self.plot_time_comparison(),
            self.plot_time_distribution(),
            self.plot_memory_comparison(),
            self.plot_nodes_by_hints(),
        ]

    def plot_time_comparison(self) -> str:
        """Create bar chart comparing average solve times."""
        fig, ax = plt.subplots(figsize=(10, 6))

        strategies = self.strategies
        avg_times = [
            np.mean([r.time_seconds for r in self.results if r.strategy == s])
            for s in strategies
        ]
        colors = [self.COLORS.get(s, self.DEFAULT_COLOR) for s in strategies]

        bars = ax.bar(strategies, avg_times, color=colors, edgecolor='black', linewidth=0.5)

        for bar, avg in zip(bars, avg_times):
            ax.annotate(f'{avg:.4f}s',
                        xy=(bar.get_x() + bar.get_width() / 2, bar.get_height()),
                        xytext=(0, 3),
                        textcoords="offset points",
                        ha='center', va='bottom', fontsize=10)

        ax.set_xlabel('Strategy', fontsize=12)
        ax.set_ylabel('Average Time (seconds)', fontsize=12)
        ax.set_title('Average Search Time by Strategy', fontsize=14, fontweight='bold')
        ax.set_ylim(bottom=0)

        return self._save("time_comparison.png")

    def plot_time_distribution(self) -> str:
        """Create box plot showing time distribution per strategy."""
        fig, ax = plt.subplots(figsize=(12, 6))

        strategies = [r.strategy for r in self.results]
        sns.boxplot(
            x=strategies,
            y=[r.time_seconds for r in self.results],
            hue=strategies,
            order=self.strategies,
            hue_order=self.strategies,
            palette={s: self.COLORS.get(s, self.DEFAULT_COLOR) for s in self.strategies},
            dodge=False,
            ax=ax,
        )
        if ax.get_legend() is not None:
            ax.get_legend().remove()

        ax.set_xlabel('Strategy', fontsize=12)
        ax.set_ylabel('Time (seconds)', fontsize=12)
        ax.set_title('Search Time Distribution by Strategy', fontsize=14, fontweight='bold')

        return self._save("time_distribution.png")

    def plot_memory_comparison(self) -> str:
        """Create bar chart comparing peak traced memory."""
        fig, ax = plt.subplots(figsize=(10, 6))

        strategies = self.strategies
        avg_memory = [
            np.mean([r.memory_bytes / 1024 for r in self.results if r.strategy == s])
            for s in strategies
        ]
        colors = [self.COLORS.get(s, self.DEFAULT_COLOR) for s in strategies]

        bars = ax.bar(strategies, avg_memory, color=colors, edgecolor='black', linewidth=0.5)

        for bar, mem in zip(bars, avg_memory):
            ax.annotate(f'{mem:.1f} KB',
                        xy=(bar.get_x() + bar.get_width() / 2, bar.get_height()),
                        xytext=(0, 3),
                        textcoords="offset points",
                        ha='center', va='bottom', fontsize=10)

        ax.set_xlabel('Strategy', fontsize=12)
        ax.set_ylabel('Average Peak Memory (KB)', fontsize=12)
        ax.set_title('Peak Memory by Strategy', fontsize=14, fontweight='bold')
        ax.set_ylim(bottom=0)

        return self._save("memory_comparison.png")

    def plot_nodes_by_hints(self) -> str:
        """Scatter plot of search nodes against the number of hints."""
        fig, ax = plt.subplots(figsize=(12, 6))

        for strategy in self.strategies:
            subset = [r for r in self.results if r.strategy == strategy]
            ax.scatter(
                [r.hints for r in subset],
                # Log scale needs positive values; fully given grids explore 0 nodes
                [max(r.nodes_explored, 1) for r in subset],
                label=strategy,
                color=self.COLORS.get(strategy, self.DEFAULT_COLOR),
                edgecolor='black', linewidth=0.5, alpha=0.7,
            )

        ax.set_xlabel('Hints', fontsize=12)
        ax.set_ylabel('Nodes Explored (Log Scale)', fontsize=12)
        ax.set_title('Search Nodes by Number of Hints', fontsize=14, fontweight='bold')
        ax.set_yscale('log')
        ax.legend(title='Strategy')

        return self._save("nodes_by_hints.png")

    def generate_summary_table(self) -> str:
        """Generate a markdown summary table."""
        lines = [
            "# Benchmark Summary\n",
            "| Strategy | Puzzles | Avg Time | Avg Memory | Avg Nodes | Solutions | Interrupted |",
            "|----------|---------|----------|------------|-----------|-----------|-------------|"
        ]

        for strategy in self.strategies:
            subset = [r for r in self.results if r.strategy == strategy]
            avg_time = np.mean([r.time_seconds for r in subset])
            avg_memory = np.mean([r.memory_bytes / 1024 for r in subset])
            avg_nodes = np.mean([r.nodes_explored for r in subset])
            solutions = sum(r.solutions for r in subset)
            interrupted = sum(1 for r in subset if r.interrupted)

            lines.append(
                f"| {strategy} | {len(subset)} | {avg_time:.4f}s | {avg_memory:.1f} KB | {int(avg_nodes):,} | {solutions:,} | {interrupted} |"
            )

        path = os.path.join(self.output_dir, "benchmark_summary.md")
        with open(path, "w") as f:
            f.write("\n".join(lines))

        return path
