"""
Utility functions for saving, naming and previewing rendered canvases.
"""

import datetime
import os
from typing import Optional, Union

import matplotlib.pyplot as plt

from sierpinski.canvas import Canvas

PathLike = Union[str, os.PathLike]


def output_filename(width: int, height: int, iterations: int,
                    now: Optional[datetime.datetime] = None) -> str:
    """
    Timestamped PNG file name, e.g. ``16204533_512x512_4000000.png``.

    Args:
        width: Canvas width
        height: Canvas height
        iterations: Number of plotted points
        now: Timestamp to use; defaults to the current UTC time
    """
    now = now or datetime.datetime.now(datetime.timezone.utc)
    return f"{now.strftime('%d%H%M%S')}_{width}x{height}_{iterations}.png"


def check_output_path(path: PathLike) -> None:
    """Raise FileNotFoundError if the parent directory of ``path`` does not exist."""
    parent = os.path.dirname(os.path.abspath(os.fspath(path)))
    if not os.path.isdir(parent):
        raise FileNotFoundError(f"Directory {parent!r} does not exist")


def save_canvas(canvas: Canvas, path: PathLike) -> str:
    """
    Encode the canvas as PNG.

    Returns:
        The path written to, as a string
    """
    path = os.fspath(path)
    check_output_path(path)
    plt.imsave(path, canvas.pixels, format='png')
    return path


def visualize_canvas(canvas: Canvas,
                     title: str = "Sierpinski Triangle",
                     figsize: tuple = (10, 10),
                     save_path: Optional[str] = None) -> None:
    """
    Show a canvas with matplotlib.

    Row 0 is drawn at the top, the same orientation as the saved PNG.

    Args:
        canvas: Canvas to display
        title: Plot title
        figsize: Figure size
        save_path: If provided, save the figure to this path instead of showing
    """
    plt.figure(figsize=figsize)
    plt.imshow(canvas.pixels, origin='upper', interpolation='nearest')
    plt.title(title)
    plt.axis('off')

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        plt.close()
        print(f"Saved to {save_path}")
    else:
        plt.show()
