"""
Shared matplotlib styling for the index charts.
Adapted from BeautifulFigures, Andrey Churkin, https://github.com/AndreyChurkin/BeautifulFigures
"""

import matplotlib.pyplot as plt

# https://www.color-hex.com/color-palette/106106
INDEX_COLORS = {
    'NDVI': '#95BB63',
    'EVI': '#77b5b6',
    'NDMI': '#6a408d',
}
FALLBACK_COLOR = '#8a8a8a'


def set_plot_style():
    """Sets a consistent style for matplotlib plots."""
    plt.rcParams.update({
        'font.family': 'monospace',
        'font.size': 14,
        'axes.titlesize': 16,
        'axes.labelsize': 14,
        'xtick.labelsize': 12,
        'ytick.labelsize': 12,
        'legend.fontsize': 12,
        'figure.titlesize': 16,

        # Embed fonts as TrueType (keeps text selectable)
        'pdf.fonttype': 42,
        'ps.fonttype': 42,
    })


def get_styled_figure_ax(figsize=(10, 6), grid=True):
    """
    Creates a matplotlib figure and axes with a consistent style.
    """
    set_plot_style()
    fig, ax = plt.subplots(figsize=figsize)

    if grid:
        ax.grid(True, which='major', linestyle='-', linewidth=0.75, alpha=0.25)
        ax.minorticks_on()
        ax.grid(True, which='minor', linestyle='-', linewidth=0.25, alpha=0.15)
        ax.set_axisbelow(True)
    return fig, ax


def style_legend(ax, loc='upper center', bbox_to_anchor=(0.5, 1.15), ncol=3, frameon=False):
    """Styles the legend of a plot."""
    handles, labels = ax.get_legend_handles_labels()
    if handles and labels:
        ax.legend(
            handles,
            labels,
            loc=loc,
            bbox_to_anchor=bbox_to_anchor,
            ncol=ncol,
            frameon=frameon
        )
