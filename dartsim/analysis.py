"""Matplotlib analysis charts: hit probability vs skill, landing scatter, leg lengths, averages."""

import os
import random

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend
import matplotlib.pyplot as plt
import numpy as np

from dartcore.types import Target, TargetType
from dartcore.targets import get_target_coordinates
from dartcore.throws import DIFFICULTY_PRESETS, calculate_hit_probability, execute_throw
from dartcore.game import simulate_leg
from dartcore import board

PRESET_COLORS = {
    "beginner": "#dc3545",
    "intermediate": "#ffc107",
    "advanced": "#4ecdc4",
    "expert": "#28a745",
}


def _style_chart(ax, title):
    """Apply dark theme styling to chart."""
    ax.set_facecolor("#0f0f1a")
    ax.set_title(title, color="#e0e0e0", fontsize=13, fontweight="bold", pad=12)
    ax.tick_params(colors="#888888", labelsize=9)
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    ax.spines["bottom"].set_color("#333333")
    ax.spines["left"].set_color("#333333")
    ax.xaxis.label.set_color("#aaaaaa")
    ax.yaxis.label.set_color("#aaaaaa")


def _draw_board_rings(ax):
    """Outline every ring edge and the board edge."""
    for r in board.RING_RADII:
        ax.add_patch(plt.Circle((0, 0), r, fill=False, color="#555555", linewidth=0.8))
    ax.add_patch(plt.Circle((0, 0), board.BOARD_EDGE_RADIUS, fill=False,
                            color="#333333", linewidth=1.2, linestyle="--"))


def landing_points(target: Target, std_dev_mm: float, n_throws: int) -> np.ndarray:
    """Simulate n_throws darts and return an (n, 2) array of landing points."""
    pts = np.empty((n_throws, 2))
    for i in range(n_throws):
        p = execute_throw(target, std_dev_mm).landing_point
        pts[i] = (p.x, p.y)
    return pts


def chart_hit_probability_vs_skill(std_devs=None, samples=2000, save_path=None):
    """Chart 1: Hit Probability vs Player Scatter.

    One line per target (T20, D20, inner bull) across a std-dev sweep.
    """
    if std_devs is None:
        std_devs = np.linspace(2, 60, 12)

    t20 = get_target_coordinates(TargetType.TRIPLE, 20)
    d20 = get_target_coordinates(TargetType.DOUBLE, 20)
    lines = [
        ("T20", t20, "TRIPLE", 20, "#e94560"),
        ("D20", d20, "DOUBLE", 20, "#ffc107"),
        ("BULL", None, "INNER_BULL", None, "#28a745"),
    ]

    fig, ax = plt.subplots(figsize=(8, 5))
    fig.set_facecolor("#0f0f1a")
    _style_chart(ax, "Hit Probability vs Player Scatter")

    for label, aim, area, segment, color in lines:
        x, y = (aim.x, aim.y) if aim is not None else (0.0, 0.0)
        probs = [
            calculate_hit_probability(x, y, float(sd), area, segment, samples=samples) * 100
            for sd in std_devs
        ]
        ax.plot(std_devs, probs, color=color, marker="o", linewidth=2, markersize=6, label=label)

    for key, preset in DIFFICULTY_PRESETS.items():
        ax.axvline(preset["std_dev_mm"], color=PRESET_COLORS[key], linestyle=":", alpha=0.5)

    ax.set_xlabel("Standard deviation (mm)")
    ax.set_ylabel("Hit probability (%)")
    ax.set_ylim(0, 105)
    ax.legend(facecolor="#1a1a2e", edgecolor="#333", labelcolor="#e0e0e0", fontsize=9)
    ax.grid(True, alpha=0.15)

    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, facecolor=fig.get_facecolor())
    return fig


def chart_landing_scatter(preset="intermediate", n_throws=500, save_path=None):
    """Chart 2: Landing points of darts aimed at T20 for one difficulty preset."""
    std_dev = DIFFICULTY_PRESETS[preset]["std_dev_mm"]
    target = Target(TargetType.TRIPLE, 20, "T20")
    pts = landing_points(target, std_dev, n_throws)

    fig, ax = plt.subplots(figsize=(6, 6))
    fig.set_facecolor("#0f0f1a")
    _style_chart(ax, f"Landing Scatter at T20 ({DIFFICULTY_PRESETS[preset]['label']})")
    _draw_board_rings(ax)

    ax.scatter(pts[:, 0], pts[:, 1], s=6, c=PRESET_COLORS[preset], alpha=0.6)
    aim = get_target_coordinates(TargetType.TRIPLE, 20)
    ax.scatter([aim.x], [aim.y], s=80, marker="x", c="white")

    lim = board.BOARD_EDGE_RADIUS + 20
    ax.set_xlim(-lim, lim)
    ax.set_ylim(lim, -lim)  # +y points down the board
    ax.set_aspect("equal")
    ax.set_xlabel("x (mm)")
    ax.set_ylabel("y (mm)")

    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, facecolor=fig.get_facecolor())
    return fig


def _darts_per_leg(std_dev_mm, n_legs, seed):
    random.seed(seed)
    darts = []
    for _ in range(n_legs):
        leg = simulate_leg(std_dev_mm)
        if leg.finished:
            darts.append(leg.stats["darts_thrown"])
    return np.array(darts)


def chart_leg_lengths(n_legs=20, save_path=None):
    """Chart 3: Darts needed to finish a 501 leg, per difficulty preset."""
    fig, ax = plt.subplots(figsize=(8, 5))
    fig.set_facecolor("#0f0f1a")
    _style_chart(ax, "Darts to Finish 501 by Skill")

    for i, (key, preset) in enumerate(DIFFICULTY_PRESETS.items()):
        darts = _darts_per_leg(preset["std_dev_mm"], n_legs, seed=i * 100)
        if darts.size == 0:
            continue
        ax.hist(darts, bins=15, alpha=0.6, color=PRESET_COLORS[key],
                label=f"{preset['label']} (median {np.median(darts):.0f})",
                edgecolor=PRESET_COLORS[key])

    ax.set_xlabel("Darts thrown")
    ax.set_ylabel("Legs")
    ax.legend(facecolor="#1a1a2e", edgecolor="#333", labelcolor="#e0e0e0", fontsize=9)
    ax.grid(True, alpha=0.15, axis="y")

    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, facecolor=fig.get_facecolor())
    return fig


def chart_three_dart_average(n_legs=10, save_path=None):
    """Chart 4: Three-dart average per preset, with spread across legs."""
    labels, means, spreads, colors = [], [], [], []
    for i, (key, preset) in enumerate(DIFFICULTY_PRESETS.items()):
        random.seed(i * 31)
        averages = np.array([
            simulate_leg(preset["std_dev_mm"]).stats["three_dart_average"]
            for _ in range(n_legs)
        ])
        labels.append(preset["label"])
        means.append(averages.mean())
        spreads.append(averages.std())
        colors.append(PRESET_COLORS[key])

    fig, ax = plt.subplots(figsize=(7, 5))
    fig.set_facecolor("#0f0f1a")
    _style_chart(ax, "Three-Dart Average by Skill")

    bars = ax.bar(labels, means, yerr=spreads, color=colors, alpha=0.85,
                  ecolor="#e0e0e0", capsize=6)
    for bar, m in zip(bars, means):
        ax.text(bar.get_x() + bar.get_width() / 2, bar.get_height() + 1,
                f"{m:.1f}", ha="center", va="bottom", fontsize=9, color="#aaa")

    ax.set_ylabel("Points per three darts")
    ax.grid(True, alpha=0.15, axis="y")

    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, facecolor=fig.get_facecolor())
    return fig


def generate_all_charts(output_dir="."):
    """Generate all analysis charts and save to output directory."""
    os.makedirs(output_dir, exist_ok=True)

    charts = [
        ("chart_hit_probability.png", chart_hit_probability_vs_skill),
        ("chart_landing_scatter.png", chart_landing_scatter),
        ("chart_leg_lengths.png", chart_leg_lengths),
        ("chart_three_dart_average.png", chart_three_dart_average),
    ]

    paths = []
    for filename, fn in charts:
        path = os.path.join(output_dir, filename)
        fn(save_path=path)
        paths.append(path)
        print(f"  Saved: {path}")

    plt.close("all")
    return paths
