import os

import geemap
import geemap.foliumap as geemap_folium
import pandas as pd
from loguru import logger
from typer import Typer

from mangrove_watch.config import CONFIG, get_site
from src.earth_engine import authenticate
from src.data.gee_functions import compute_site_stats, preview_ndvi, site_geometry, sites_feature_collection
from src.utils.visualization import save_site_charts

app = Typer()


@app.command()
def stats(
    output: str = CONFIG.STATS_FILE,
    charts: bool = True,
    charts_dir: str = CONFIG.CHARTS_DIR,
):
    """
    Mean NDVI/EVI/NDMI over mangroves for every site and analysis year.
    """
    authenticate()
    logger.info(f"Computing index statistics for {len(CONFIG.sites)} sites, years {list(CONFIG.analysis.years)}")
    df = compute_site_stats()

    with pd.option_context('display.max_columns', None, 'display.width', 120):
        print("Per-AOI NDVI/EVI/NDMI (mean) by year")
        print(df)

    os.makedirs(os.path.dirname(output), exist_ok=True)
    df.to_csv(output, index=False)
    logger.success(f"Statistics saved to {output}")

    if charts:
        save_site_charts(df, charts_dir)


@app.command()
def preview(
    site: str = CONFIG.preview.site,
    year: int = CONFIG.preview.year,
    output_dir: str = CONFIG.PREVIEW_DIR,
):
    """
    Exports the mangrove-masked NDVI quick-look as GeoTIFF and interactive HTML map.
    """
    authenticate()
    aoi_site = get_site(site)
    ndvi = preview_ndvi(aoi_site, year)
    if ndvi is None:
        logger.warning(f"No cloud-free imagery for {aoi_site.name} in {year}, nothing to preview.")
        return

    os.makedirs(output_dir, exist_ok=True)
    basename = f"{site}_{year}_ndvi"
    region = site_geometry(aoi_site)

    tif_path = os.path.join(output_dir, f"{basename}.tif")
    geemap.ee_export_image(
        ndvi,
        filename=tif_path,
        scale=CONFIG.analysis.scale,
        region=region,
        file_per_band=False
    )
    if not os.path.exists(tif_path):
        logger.warning(f"Failed to export NDVI preview to {tif_path}")
    else:
        logger.success(f"NDVI preview saved to {tif_path}")

    vis = {'min': CONFIG.preview.min, 'max': CONFIG.preview.max, 'palette': list(CONFIG.preview.palette)}
    sites = sites_feature_collection(CONFIG.sites)
    m = geemap_folium.Map()
    m.centerObject(sites, CONFIG.preview.zoom)
    m.addLayer(sites, {'color': 'yellow'}, 'AOI Sites')
    m.addLayer(ndvi, vis, f"Preview NDVI {year} ({aoi_site.name})")
    html_path = os.path.join(output_dir, f"{basename}.html")
    m.to_html(html_path)
    logger.success(f"Preview map saved to {html_path}")


if __name__ == "__main__":
    app()
