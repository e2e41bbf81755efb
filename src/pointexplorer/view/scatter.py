from __future__ import annotations

from typing import Optional, Sequence, TYPE_CHECKING

import matplotlib.pyplot as plt

from pointexplorer.view.colors import RGB

if TYPE_CHECKING:
    from matplotlib.axes import Axes
    from pointexplorer.controller.projection import ProjectedPoint


def plot_projection(
    points: Sequence[ProjectedPoint],
    colors: Sequence[RGB],
    x_label: str = "x",
    y_label: str = "y",
    title: Optional[str] = None,
    ax: Optional[Axes] = None,
) -> Axes:
    """
    Scatter plot of projected points.

    Args:
        points: Output of ProjectionEngine.project_2d().
        colors: One (r, g, b) colour (0..255) per point.
        x_label: Label of the x axis.
        y_label: Label of the y axis.
        title: Optional plot title.
        ax: Axes to draw into. A new figure is created when omitted.

    Returns:
        The Axes containing the plot.
    """
    if len(colors) != len(points):
        raise ValueError(f"Got {len(colors)} colours for {len(points)} points")

    if ax is None:
        _, ax = plt.subplots(figsize=(7, 5), layout="constrained")

    if points:
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        facecolors = [(r / 255, g / 255, b / 255) for r, g, b in colors]
        ax.scatter(xs, ys, c=facecolors, s=18, edgecolors="none")

    ax.grid(visible=True, which='major', axis='both', linestyle='-', color='gray', lw=0.5)
    ax.minorticks_on()
    ax.grid(visible=True, which='minor', axis='both', linestyle=':', color='gray', lw=0.5)

    ax.set_xlabel(x_label)
    ax.set_ylabel(y_label)
    if title:
        ax.set_title(title)
    return ax


def save_projection_plot(
    points: Sequence[ProjectedPoint],
    colors: Sequence[RGB],
    filepath: str,
    x_label: str = "x",
    y_label: str = "y",
    title: Optional[str] = None,
) -> None:
    ax = plot_projection(points, colors, x_label=x_label, y_label=y_label, title=title)
    ax.figure.savefig(filepath, dpi=150)
    plt.close(ax.figure)
