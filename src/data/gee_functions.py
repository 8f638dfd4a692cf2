"""
Earth Engine side of the mangrove index analysis: yearly Sentinel-2 composites,
SCL cloud masking, NDVI/EVI/NDMI band math and zonal reduction over the
Global Mangrove Watch extent.
"""

from dataclasses import dataclass, asdict
from typing import List, Optional

import ee
import pandas as pd
from loguru import logger
from tqdm import tqdm

from mangrove_watch.config import CONFIG

INDEX_BANDS = ['NDVI', 'EVI', 'NDMI']
EVI_EXPRESSION = '2.5 * ((NIR - RED) / (NIR + 6 * RED - 7.5 * BLUE + 1))'
STATS_COLUMNS = ['site', 'year'] + INDEX_BANDS + ['pixels']


@dataclass
class SiteYearStats:
    site: str
    year: int
    NDVI: Optional[float] = None
    EVI: Optional[float] = None
    NDMI: Optional[float] = None
    pixels: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


def site_geometry(site):
    return ee.Geometry.Polygon([[list(coords) for coords in site.polygon]])


def sites_feature_collection(sites) -> ee.FeatureCollection:
    return ee.FeatureCollection([
        ee.Feature(site_geometry(site), {'name': site.name}) for site in sites
    ])


def mask_s2_scl(image):
    """
    Masks Sentinel-2 SR pixels using the scene classification (SCL) band.
    """
    scl = image.select('SCL')
    codes = list(CONFIG.analysis.scl_masked_classes)
    mask = scl.neq(codes[0])
    for code in codes[1:]:
        mask = mask.And(scl.neq(code))
    return image.updateMask(mask)


def get_s2_composite(year: int, aoi):
    """
    Yearly median Sentinel-2 composite clipped to the AOI.
    Returns None when no scene passes the cloud filter.
    """
    start = ee.Date.fromYMD(year, 1, 1)
    end = ee.Date.fromYMD(year, 12, 31)
    col = (ee.ImageCollection(CONFIG.analysis.collection)
           .filterBounds(aoi)
           .filterDate(start, end)
           .filter(ee.Filter.lt('CLOUDY_PIXEL_PERCENTAGE', CONFIG.analysis.max_cloud_percentage))
           .map(mask_s2_scl)
           .select(list(CONFIG.analysis.bands))
           )

    if col.size().getInfo() == 0:
        logger.warning(f"No Sentinel-2 images below {CONFIG.analysis.max_cloud_percentage}% cloud for {year}")
        return None
    return col.median().clip(aoi)


def compute_indices(image):
    ndvi = image.normalizedDifference(['B8', 'B4']).rename('NDVI')
    evi = image.expression(
        EVI_EXPRESSION,
        {'NIR': image.select('B8'), 'RED': image.select('B4'), 'BLUE': image.select('B2')}
    ).rename('EVI')
    ndmi = image.normalizedDifference(['B8', 'B11']).rename('NDMI')
    return ndvi.addBands([evi, ndmi])


def mangrove_mask_asset(year: int) -> str:
    """GMW v3 extent layer for the epoch of the given year."""
    if year <= CONFIG.gmw.cutoff_year:
        return CONFIG.gmw.early
    return CONFIG.gmw.late


def mangrove_mask_for_year(year: int, aoi):
    fc = ee.FeatureCollection(mangrove_mask_asset(year)).filterBounds(aoi)
    return ee.Image().byte().paint(fc, 1).rename('mangrove').clip(aoi)


def masked_indices(composite, year: int, aoi):
    return compute_indices(composite).updateMask(mangrove_mask_for_year(year, aoi))


def site_year_stats(site, year: int) -> SiteYearStats:
    """
    Mean NDVI/EVI/NDMI over mangrove pixels of a site for one year, plus the
    number of valid NDVI pixels.
    """
    geom = site_geometry(site)
    composite = get_s2_composite(year, geom)
    if composite is None:
        logger.warning(f"No composite for {site.name} {year}, returning empty statistics.")
        return SiteYearStats(site=site.name, year=year)

    idx = masked_indices(composite, year, geom)
    reduce_args = dict(
        geometry=geom,
        scale=CONFIG.analysis.scale,
        maxPixels=CONFIG.analysis.max_pixels,
        bestEffort=True,
    )
    means = idx.reduceRegion(reducer=ee.Reducer.mean(), **reduce_args).getInfo() or {}
    pixels = idx.select('NDVI').reduceRegion(reducer=ee.Reducer.count(), **reduce_args).get('NDVI').getInfo()

    stats = SiteYearStats(
        site=site.name,
        year=year,
        NDVI=means.get('NDVI'),
        EVI=means.get('EVI'),
        NDMI=means.get('NDMI'),
        pixels=int(pixels or 0),
    )
    logger.debug(f"{site.name} {year}: {stats}")
    return stats


def compute_site_stats(sites=None, years: Optional[List[int]] = None) -> pd.DataFrame:
    """Runs site_year_stats for every site and year."""
    sites = CONFIG.sites if sites is None else sites
    years = list(CONFIG.analysis.years) if years is None else years

    records = []
    for site in tqdm(sites, desc="Sites"):
        for year in years:
            records.append(site_year_stats(site, int(year)).to_dict())

    df = pd.DataFrame(records, columns=STATS_COLUMNS)
    return df.sort_values(['site', 'year']).reset_index(drop=True)


def preview_ndvi(site, year: int):
    """Mangrove-masked NDVI for the quick-look map, or None without imagery."""
    geom = site_geometry(site)
    composite = get_s2_composite(year, geom)
    if composite is None:
        return None
    return masked_indices(composite, year, geom).select('NDVI')
