import numpy as np
import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection

# draw an n-by-2-by-2 segment array in a single color; the turtle works
# in y-down coordinates so the y axis is inverted to match

def plot_segments(segments, color='b', ax=None, image_filename=None):

    segments = np.asarray(segments, dtype=float)

    assert len(segments.shape) == 3 and segments.shape[1:] == (2, 2)

    if ax is None:
        ax = plt.figure().add_subplot()

    lc = LineCollection(segments, colors=[color], linewidths=1)

    ax.add_collection(lc)
    ax.autoscale()

    ax.set_aspect('equal')
    ax.axis('off')

    if not ax.yaxis_inverted():
        ax.invert_yaxis()

    if image_filename is not None:
        ax.figure.savefig(image_filename)

    return ax


def plot_drawing(drawing, ax=None, image_filename=None):
    return plot_segments(drawing.segments, drawing.color, ax, image_filename)
