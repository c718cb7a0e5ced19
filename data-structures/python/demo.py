"""
Binary Tree Demo -- Insertion, traversal orders, search, shape vs insertion
order, persistence of old versions, and equivalence of the two insertion
strategies.

Generates:
- viz/*.png -- Individual visualization files
- report.pdf -- Comprehensive PDF report
"""

import sys
from pathlib import Path

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages

sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))
from binary_tree import BinaryTree

SEED = 42

VIZ_DIR = Path(__file__).parent / "viz"
VIZ_DIR.mkdir(exist_ok=True)

COLORS = {
    "blue": "#3498db",
    "red": "#e74c3c",
    "orange": "#f39c12",
    "green": "#27ae60",
    "purple": "#9b59b6",
    "dark": "#2c3e50",
}

SAMPLE_VALUES = [7, 10, 2, 1, 5, 9, 3]
SIZES = [8, 16, 32, 64, 128, 256, 512]
N_TRIALS = 20


def _layout(tree, depth=0, positions=None, edges=None):
    """Place each node at (in-order rank, -depth). Recursive; small trees only."""
    if positions is None:
        positions, edges = [], []
    if tree.is_empty():
        return None, positions, edges

    left_index, _, _ = _layout(tree.left, depth + 1, positions, edges)
    index = len(positions)
    positions.append((index, -depth, tree.value))
    right_index, _, _ = _layout(tree.right, depth + 1, positions, edges)

    for child in (left_index, right_index):
        if child is not None:
            edges.append((index, child))
    return index, positions, edges


def _draw_tree(ax, tree, title, highlight=None, color=COLORS["blue"]):
    _, positions, edges = _layout(tree)
    for parent, child in edges:
        x0, y0, _ = positions[parent]
        x1, y1, _ = positions[child]
        ax.plot([x0, x1], [y0, y1], color=COLORS["dark"], linewidth=1.2, zorder=1)
    for x, y, value in positions:
        face = COLORS["orange"] if highlight is not None and value == highlight else color
        ax.scatter([x], [y], s=900, color=face, edgecolors=COLORS["dark"], zorder=2)
        ax.text(x, y, str(value), ha="center", va="center", fontsize=11,
                color="white", fontweight="bold", zorder=3)
    ax.set_title(title)
    ax.axis("off")
    if positions:
        ax.set_xlim(-1, len(positions))
        ax.set_ylim(min(y for _, y, _ in positions) - 0.7, 0.7)


# ---------------------------------------------------------------------------
# Example 1: Sample Tree
# ---------------------------------------------------------------------------
def example_1_sample_tree():
    """Build the sample tree, print traversals, search and rendering."""
    print("=" * 60)
    print("Example 1: Sample Tree")
    print("=" * 60)

    tree: BinaryTree[int] = BinaryTree()
    for value in SAMPLE_VALUES:
        tree.insert(value)

    print(f"Inserted: {SAMPLE_VALUES}")
    print(f"Count: {tree.count()}, height: {tree.height()}")
    print("In-order:")
    tree.traverse_in_order(print)
    print(f"Pre-order:  {tree.pre_order()}")
    print(f"Post-order: {tree.post_order()}")

    found = tree.search(5)
    print(f"search(5) -> {found}")
    print(f"search(6) -> {tree.search(6)}")
    print(f"Rendering: {tree}")

    fig, axes = plt.subplots(1, 2, figsize=(13, 5))
    _draw_tree(axes[0], tree, "Tree from insertions [7, 10, 2, 1, 5, 9, 3]", highlight=5)
    _draw_tree(axes[1], found, "Subtree returned by search(5)", color=COLORS["green"])

    fig.tight_layout()
    fig.savefig(VIZ_DIR / "01_sample_tree.png", dpi=150)
    plt.close(fig)

    return fig, tree


# ---------------------------------------------------------------------------
# Example 2: Expression Tree
# ---------------------------------------------------------------------------
def example_2_expression_tree():
    """Assemble an expression tree by hand; traversals give the three notations."""
    print("\n" + "=" * 60)
    print("Example 2: Expression Tree")
    print("=" * 60)

    def leaf(symbol):
        return BinaryTree.node(BinaryTree(), symbol, BinaryTree())

    a_minus_10 = BinaryTree.node(leaf("a"), "-", leaf("10"))
    times_left = BinaryTree.node(leaf("5"), "*", a_minus_10)
    minus_4 = BinaryTree.node(BinaryTree(), "-", leaf("4"))
    divide_3_b = BinaryTree.node(leaf("3"), "/", leaf("b"))
    times_right = BinaryTree.node(minus_4, "*", divide_3_b)
    expression = BinaryTree.node(times_left, "+", times_right)

    print(f"Prefix:  {' '.join(expression.pre_order())}")
    print(f"Infix:   {' '.join(expression.in_order())}")
    print(f"Postfix: {' '.join(expression.post_order())}")
    print(f"Ordered as a search tree: {expression.is_valid()}")

    fig, ax = plt.subplots(figsize=(12, 5))
    _draw_tree(ax, expression, "5 * (a - 10) + (-4) * (3 / b)", color=COLORS["purple"])

    fig.tight_layout()
    fig.savefig(VIZ_DIR / "02_expression_tree.png", dpi=150)
    plt.close(fig)

    return fig, expression


# ---------------------------------------------------------------------------
# Example 3: Shape vs Insertion Order
# ---------------------------------------------------------------------------
def example_3_insertion_order():
    """Height of trees built from sorted vs shuffled input."""
    print("\n" + "=" * 60)
    print("Example 3: Shape vs Insertion Order")
    print("=" * 60)

    rng = np.random.default_rng(SEED)
    ascending = []
    shuffled = np.zeros((len(SIZES), N_TRIALS))

    for i, n in enumerate(SIZES):
        ascending.append(BinaryTree.from_values(range(n)).height())
        for trial in range(N_TRIALS):
            order = rng.permutation(n).tolist()
            shuffled[i, trial] = BinaryTree.from_values(order).height()
        print(f"n={n:4d}  ascending height={ascending[-1]:4d}  "
              f"shuffled height={shuffled[i].mean():6.2f} +/- {shuffled[i].std():.2f}")

    sizes = np.array(SIZES)
    fig, axes = plt.subplots(1, 2, figsize=(12, 5))

    axes[0].plot(sizes, ascending, "o-", color=COLORS["red"], linewidth=2, label="Ascending input")
    axes[0].errorbar(sizes, shuffled.mean(axis=1), yerr=shuffled.std(axis=1), fmt="s-",
                     color=COLORS["blue"], linewidth=2, capsize=4, label="Shuffled input")
    axes[0].set_xlabel("Number of values")
    axes[0].set_ylabel("Height")
    axes[0].set_title("Height vs Tree Size")
    axes[0].legend()
    axes[0].grid(True, alpha=0.3)

    axes[1].plot(sizes, shuffled.mean(axis=1), "s-", color=COLORS["blue"], linewidth=2,
                 label="Shuffled input")
    axes[1].plot(sizes, np.log2(sizes), "--", color=COLORS["dark"], label="log2(n)")
    axes[1].plot(sizes, 2 * np.log(sizes), ":", color=COLORS["green"], label="2 ln(n)")
    axes[1].set_xscale("log", base=2)
    axes[1].set_xlabel("Number of values (log scale)")
    axes[1].set_ylabel("Height")
    axes[1].set_title("Shuffled Input Height vs Logarithmic Bounds")
    axes[1].legend()
    axes[1].grid(True, alpha=0.3)

    fig.tight_layout()
    fig.savefig(VIZ_DIR / "03_insertion_order.png", dpi=150)
    plt.close(fig)

    return fig, (ascending, shuffled)


# ---------------------------------------------------------------------------
# Example 4: Persistence
# ---------------------------------------------------------------------------
def example_4_persistence():
    """Keep every version produced by insert; each one stays unchanged."""
    print("\n" + "=" * 60)
    print("Example 4: Persistence of Old Versions")
    print("=" * 60)

    tree: BinaryTree[int] = BinaryTree()
    versions = []
    for value in SAMPLE_VALUES:
        tree.insert(value)
        versions.append(tree.copy())

    for value in [4, 8, 6]:
        tree.naive_insert(value)

    counts = [version.count() for version in versions]
    for i, version in enumerate(versions):
        print(f"Version {i + 1}: count={version.count()}  in-order={version.in_order()}")
    print(f"Latest tree after naive inserts of [4, 8, 6]: {tree.in_order()}")
    print(f"Version 7 untouched: {versions[-1].in_order() == sorted(SAMPLE_VALUES)}")

    fig = plt.figure(figsize=(13, 5))
    ax_counts = fig.add_subplot(1, 3, 1)
    ax_counts.bar(np.arange(1, len(counts) + 1), counts, color=COLORS["blue"])
    ax_counts.axhline(tree.count(), color=COLORS["red"], linestyle="--",
                      label=f"Latest tree ({tree.count()})")
    ax_counts.set_xlabel("Version")
    ax_counts.set_ylabel("Count")
    ax_counts.set_title("Count of Each Saved Version")
    ax_counts.legend()
    ax_counts.grid(True, alpha=0.3, axis="y")

    _draw_tree(fig.add_subplot(1, 3, 2), versions[3], "Version 4")
    _draw_tree(fig.add_subplot(1, 3, 3), tree, "Latest tree", color=COLORS["green"])

    fig.tight_layout()
    fig.savefig(VIZ_DIR / "04_persistence.png", dpi=150)
    plt.close(fig)

    return fig, versions


# ---------------------------------------------------------------------------
# Example 5: Insertion Strategies
# ---------------------------------------------------------------------------
def example_5_strategy_equivalence():
    """naive_insert and insert produce identical trees, duplicates included."""
    print("\n" + "=" * 60)
    print("Example 5: naive_insert vs insert")
    print("=" * 60)

    rng = np.random.default_rng(SEED)
    lengths = np.arange(0, 201, 10)
    matches = []
    duplicate_share = []

    for length in lengths:
        sequence = rng.integers(0, max(1, length // 2), size=length).tolist()
        naive: BinaryTree[int] = BinaryTree()
        for value in sequence:
            naive.naive_insert(value)
        persistent = BinaryTree.from_values(sequence)
        matches.append(naive == persistent and naive.in_order() == sorted(sequence))
        duplicate_share.append(1 - len(set(sequence)) / length if length else 0.0)

    print(f"Sequences checked: {len(lengths)}, identical shapes: {sum(matches)}")

    fig, ax = plt.subplots(figsize=(10, 5))
    colors = [COLORS["green"] if match else COLORS["red"] for match in matches]
    ax.bar(lengths, duplicate_share, width=8, color=colors)
    ax.set_xlabel("Sequence length")
    ax.set_ylabel("Share of duplicate values")
    ax.set_title("Random Sequences with Duplicates (green = identical trees)")
    ax.grid(True, alpha=0.3, axis="y")

    fig.tight_layout()
    fig.savefig(VIZ_DIR / "05_strategies.png", dpi=150)
    plt.close(fig)

    return fig, matches


def generate_pdf_report(figures_data):
    """Generate comprehensive PDF report."""
    print("\n" + "=" * 60)
    print("Generating PDF Report")
    print("=" * 60)

    pdf_path = VIZ_DIR.parent / "report.pdf"

    with PdfPages(pdf_path) as pdf:
        fig = plt.figure(figsize=(11, 8.5))
        fig.text(0.5, 0.6, "Binary Search Tree", fontsize=36, ha="center", fontweight="bold")
        fig.text(0.5, 0.5, "Persistent Python Implementation", fontsize=24, ha="center")
        fig.text(0.5, 0.35, "Demonstration Report", fontsize=18, ha="center", style="italic")
        fig.text(0.5, 0.2, f"Seed: {SEED}", fontsize=12, ha="center", color="gray")
        pdf.savefig(fig)
        plt.close(fig)

        fig = plt.figure(figsize=(11, 8.5))
        fig.text(0.5, 0.95, "Summary", fontsize=24, ha="center", fontweight="bold")

        summary_text = """
The tree is either empty or a node holding a value and two subtrees.
Smaller values go left; equal and larger values go right.

• Two insertion strategies:
  - naive_insert: fills the first empty slot in place
  - insert: rebuilds the root-to-leaf path, shares the rest

• Three traversal orders:
  - in-order (sorted), pre-order (root first), post-order (root last)

• Search returns the subtree rooted at the value, or None

Key Findings:
  1. Sorted input degenerates into a linked list (height = n)
  2. Shuffled input stays within a small multiple of log2(n)
  3. Every version kept by copy() survives later insertions
  4. Both strategies build identical trees, duplicates included
"""
        fig.text(0.1, 0.85, summary_text, fontsize=12, ha="left", va="top",
                 fontfamily="monospace", linespacing=1.5)
        pdf.savefig(fig)
        plt.close(fig)

        for title, image_name in figures_data:
            fig = plt.figure(figsize=(11, 8.5))
            fig.text(0.5, 0.98, title, fontsize=14, ha="center", fontweight="bold")
            img = plt.imread(VIZ_DIR / image_name)
            ax = fig.add_axes([0.05, 0.05, 0.9, 0.88])
            ax.imshow(img)
            ax.axis("off")
            pdf.savefig(fig)
            plt.close(fig)

    print(f"PDF report saved to: {pdf_path}")
    return pdf_path


def main():
    print("\n" + "#" * 60)
    print("#" + " " * 20 + "BINARY TREE DEMO" + " " * 22 + "#")
    print("#" * 60)
    print(f"\nRandom seed: {SEED}")
    print(f"Output directory: {VIZ_DIR}")

    example_1_sample_tree()
    example_2_expression_tree()
    example_3_insertion_order()
    example_4_persistence()
    example_5_strategy_equivalence()

    generate_pdf_report([
        ("Example 1: Sample Tree", "01_sample_tree.png"),
        ("Example 2: Expression Tree", "02_expression_tree.png"),
        ("Example 3: Shape vs Insertion Order", "03_insertion_order.png"),
        ("Example 4: Persistence", "04_persistence.png"),
        ("Example 5: Insertion Strategies", "05_strategies.png"),
    ])

    print("\n" + "=" * 60)
    print("DEMO COMPLETE")
    print("=" * 60)
    print(f"\nGenerated files:")
    for f in sorted(VIZ_DIR.glob("*.png")):
        print(f"  - {f.relative_to(VIZ_DIR.parent)}")
    print(f"  - report.pdf")


if __name__ == "__main__":
    main()
