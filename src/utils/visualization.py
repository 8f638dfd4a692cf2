import os
import re

import numpy as np
import pandas as pd
import rasterio
import matplotlib.pyplot as plt
import matplotlib.colors as mcolors
from loguru import logger

from src.data.gee_functions import INDEX_BANDS
from src.utils.plot_utils import INDEX_COLORS, FALLBACK_COLOR, get_styled_figure_ax, style_legend


def plot_site_indices(df: pd.DataFrame, site: str):
    """
    Line chart of mean NDVI, EVI and NDMI against year for one site.
    Years without imagery show up as gaps.
    """
    site_df = df[df['site'] == site].sort_values('year')
    fig, ax = get_styled_figure_ax()

    for band in INDEX_BANDS:
        ax.plot(
            site_df['year'],
            site_df[band].astype(float),
            label=band,
            color=INDEX_COLORS.get(band, FALLBACK_COLOR),
            linewidth=2,
            marker='o',
            markersize=6,
        )

    ax.set_title(f"{site} - NDVI, EVI, NDMI", pad=40)
    ax.set_xlabel("Year")
    ax.set_ylabel("Mean Index (masked to mangroves)")
    ax.set_xticks(sorted(site_df['year'].unique()))
    ax.minorticks_off()
    style_legend(ax)
    fig.tight_layout()
    return fig


def site_slug(site: str) -> str:
    return re.sub(r'[^a-z0-9]+', '_', site.lower()).strip('_')


def save_site_charts(df: pd.DataFrame, output_dir: str) -> list:
    """Saves one PNG chart per site and returns the written paths."""
    os.makedirs(output_dir, exist_ok=True)
    paths = []
    for site in df['site'].unique():
        fig = plot_site_indices(df, site)
        path = os.path.join(output_dir, f"{site_slug(site)}_indices.png")
        fig.savefig(path, bbox_inches='tight', dpi=150)
        plt.close(fig)
        logger.info(f"Saved chart {path}")
        paths.append(path)
    return paths


def load_for_display(path, palette, vmin, vmax):
    """Colorizes the first band of a GeoTIFF with the given palette; masked pixels stay white."""
    with rasterio.open(path) as src:
        img = src.read(1, masked=True).astype(float)

    norm = plt.Normalize(vmin=vmin, vmax=vmax)
    cmap = mcolors.LinearSegmentedColormap.from_list('preview', list(palette))
    mapped = cmap(norm(img.filled(np.nan)))
    rgb = (mapped[:, :, :3] * 255).astype(np.uint8)
    rgb[np.ma.getmaskarray(img) | np.isnan(img.filled(np.nan))] = 255
    return rgb
