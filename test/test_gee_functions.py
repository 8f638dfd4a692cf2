"""
Unit tests for the Earth Engine analysis functions.

Tests cover:
- Composite building and the empty-collection case
- SCL cloud masking
- Index band math
- Mangrove mask epoch selection
- Per site/year zonal statistics
"""
import pytest
from unittest.mock import MagicMock

import src.data.gee_functions as gee
from mangrove_watch.config import CONFIG


# ============================================================
# Composites and masking
# ============================================================

def test_composite_is_none_without_images(fake_ee, s2_collection):
    s2_collection.size.return_value.getInfo.return_value = 0

    assert gee.get_s2_composite(2019, MagicMock()) is None
    fake_ee.ImageCollection.assert_called_once_with('COPERNICUS/S2_SR')
    fake_ee.Filter.lt.assert_called_once_with('CLOUDY_PIXEL_PERCENTAGE', 50)


def test_composite_is_clipped_median(fake_ee, s2_collection):
    aoi = MagicMock(name="aoi")
    s2_collection.size.return_value.getInfo.return_value = 7

    composite = gee.get_s2_composite(2020, aoi)

    s2_collection.median.return_value.clip.assert_called_once_with(aoi)
    assert composite is s2_collection.median.return_value.clip.return_value
    fake_ee.Date.fromYMD.assert_any_call(2020, 1, 1)
    fake_ee.Date.fromYMD.assert_any_call(2020, 12, 31)


def test_composite_keeps_blue_red_nir_swir(fake_ee, s2_collection):
    s2_collection.size.return_value.getInfo.return_value = 1
    gee.get_s2_composite(2018, MagicMock())

    chain = (fake_ee.ImageCollection.return_value.filterBounds.return_value
             .filterDate.return_value.filter.return_value.map.return_value)
    chain.select.assert_called_once_with(['B2', 'B4', 'B8', 'B11'])


def test_scl_mask_excludes_cloud_shadow_snow_classes():
    image = MagicMock(name="image")
    scl = image.select.return_value

    gee.mask_s2_scl(image)

    image.select.assert_called_once_with('SCL')
    assert [c.args[0] for c in scl.neq.call_args_list] == [3, 8, 9, 10, 11]
    image.updateMask.assert_called_once()


def test_compute_indices_band_math():
    image = MagicMock(name="image")

    gee.compute_indices(image)

    assert [c.args[0] for c in image.normalizedDifference.call_args_list] == [['B8', 'B4'], ['B8', 'B11']]
    expression, bands = image.expression.call_args.args
    assert expression == gee.EVI_EXPRESSION
    assert set(bands) == {'NIR', 'RED', 'BLUE'}
    image.normalizedDifference.return_value.rename.assert_any_call('NDVI')


# ============================================================
# Mangrove mask
# ============================================================

@pytest.mark.parametrize("year, expected", [
    (2010, CONFIG.gmw.early),
    (2015, CONFIG.gmw.early),
    (2016, CONFIG.gmw.late),
    (2020, CONFIG.gmw.late),
])
def test_mangrove_mask_asset_by_epoch(year, expected):
    assert gee.mangrove_mask_asset(year) == expected


def test_mangrove_mask_rasterizes_late_extent(fake_ee):
    aoi = MagicMock(name="aoi")

    gee.mangrove_mask_for_year(2019, aoi)

    fake_ee.FeatureCollection.assert_called_once_with(CONFIG.gmw.late)
    fake_ee.FeatureCollection.return_value.filterBounds.assert_called_once_with(aoi)
    painted = fake_ee.Image.return_value.byte.return_value.paint
    painted.assert_called_once_with(fake_ee.FeatureCollection.return_value.filterBounds.return_value, 1)
    painted.return_value.rename.assert_called_once_with('mangrove')


def test_site_geometry_uses_configured_polygon(fake_ee, lamu_site):
    gee.site_geometry(lamu_site)

    ring = fake_ee.Geometry.Polygon.call_args.args[0][0]
    assert ring[0] == [40.830, -2.350]
    assert len(ring) == 4


# ============================================================
# Zonal statistics
# ============================================================

def test_stats_are_null_without_imagery(fake_ee, lamu_site, monkeypatch):
    monkeypatch.setattr(gee, "get_s2_composite", lambda year, aoi: None)

    stats = gee.site_year_stats(lamu_site, 2019)

    assert stats.site == 'Lamu Archipelago'
    assert stats.year == 2019
    assert stats.NDVI is None
    assert stats.EVI is None
    assert stats.NDMI is None
    assert stats.pixels == 0
    fake_ee.Reducer.mean.assert_not_called()


def test_stats_from_reducers(fake_ee, lamu_site, monkeypatch):
    indices = MagicMock(name="indices")
    indices.reduceRegion.return_value.getInfo.return_value = {'NDVI': 0.61, 'EVI': 0.42, 'NDMI': 0.25}
    indices.select.return_value.reduceRegion.return_value.get.return_value.getInfo.return_value = 1234
    monkeypatch.setattr(gee, "get_s2_composite", lambda year, aoi: MagicMock(name="composite"))
    monkeypatch.setattr(gee, "masked_indices", lambda composite, year, aoi: indices)

    stats = gee.site_year_stats(lamu_site, 2020)

    assert stats.to_dict() == {
        'site': 'Lamu Archipelago', 'year': 2020,
        'NDVI': 0.61, 'EVI': 0.42, 'NDMI': 0.25, 'pixels': 1234,
    }
    kwargs = indices.reduceRegion.call_args.kwargs
    assert kwargs['scale'] == 10
    assert kwargs['bestEffort'] is True
    assert kwargs['reducer'] is fake_ee.Reducer.mean.return_value
    indices.select.assert_called_once_with('NDVI')


def test_missing_pixel_count_becomes_zero(fake_ee, lamu_site, monkeypatch):
    indices = MagicMock(name="indices")
    indices.reduceRegion.return_value.getInfo.return_value = {}
    indices.select.return_value.reduceRegion.return_value.get.return_value.getInfo.return_value = None
    monkeypatch.setattr(gee, "get_s2_composite", lambda year, aoi: MagicMock(name="composite"))
    monkeypatch.setattr(gee, "masked_indices", lambda composite, year, aoi: indices)

    stats = gee.site_year_stats(lamu_site, 2018)

    assert stats.NDVI is None
    assert stats.pixels == 0


def test_compute_site_stats_covers_every_site_and_year(monkeypatch):
    calls = []

    def fake_stats(site, year):
        calls.append((site.id, year))
        return gee.SiteYearStats(site=site.name, year=year, NDVI=0.5, EVI=0.3, NDMI=0.2, pixels=10)

    monkeypatch.setattr(gee, "site_year_stats", fake_stats)

    df = gee.compute_site_stats()

    assert list(df.columns) == gee.STATS_COLUMNS
    assert len(df) == len(CONFIG.sites) * len(CONFIG.analysis.years)
    assert set(df['site']) == {'Lamu Archipelago', 'Kilifi Creek', 'Tana Delta', 'Mtwapa Creek'}
    assert df.iloc[0]['site'] == 'Kilifi Creek'
    assert list(df[df['site'] == 'Tana Delta']['year']) == [2018, 2019, 2020]
    assert len(calls) == 12


def test_preview_is_none_without_imagery(fake_ee, lamu_site, monkeypatch):
    monkeypatch.setattr(gee, "get_s2_composite", lambda year, aoi: None)

    assert gee.preview_ndvi(lamu_site, 2020) is None


# ============================================================
# Mangrove masking of the indices
# ============================================================

def _stacked_indices(composite):
    """The image compute_indices builds from a mocked composite (NDVI with EVI/NDMI added)."""
    return composite.normalizedDifference.return_value.rename.return_value.addBands.return_value


def _mangrove_mask(fake):
    return fake.Image.return_value.byte.return_value.paint.return_value.rename.return_value.clip.return_value


def test_indices_are_masked_to_mangroves(fake_ee):
    composite = MagicMock(name="composite")
    aoi = MagicMock(name="aoi")

    masked = gee.masked_indices(composite, 2020, aoi)

    stacked = _stacked_indices(composite)
    stacked.updateMask.assert_called_once_with(_mangrove_mask(fake_ee))
    fake_ee.Image.return_value.byte.return_value.paint.return_value.rename.return_value.clip.assert_called_once_with(aoi)
    assert masked is stacked.updateMask.return_value


def test_stats_reduce_over_mangrove_masked_indices(fake_ee, lamu_site, monkeypatch):
    composite = MagicMock(name="composite")
    monkeypatch.setattr(gee, "get_s2_composite", lambda year, aoi: composite)
    masked = _stacked_indices(composite).updateMask.return_value
    masked.reduceRegion.return_value.getInfo.return_value = {'NDVI': 0.58, 'EVI': 0.39, 'NDMI': 0.22}
    masked.select.return_value.reduceRegion.return_value.get.return_value.getInfo.return_value = 880

    stats = gee.site_year_stats(lamu_site, 2019)

    _stacked_indices(composite).updateMask.assert_called_once_with(_mangrove_mask(fake_ee))
    masked.reduceRegion.assert_called_once()
    masked.select.assert_called_once_with('NDVI')
    fake_ee.FeatureCollection.assert_called_once_with(CONFIG.gmw.late)
    assert (stats.NDVI, stats.EVI, stats.NDMI, stats.pixels) == (0.58, 0.39, 0.22, 880)


def test_preview_selects_masked_ndvi(fake_ee, lamu_site, monkeypatch):
    composite = MagicMock(name="composite")
    monkeypatch.setattr(gee, "get_s2_composite", lambda year, aoi: composite)

    preview = gee.preview_ndvi(lamu_site, 2020)

    masked = _stacked_indices(composite).updateMask.return_value
    _stacked_indices(composite).updateMask.assert_called_once_with(_mangrove_mask(fake_ee))
    masked.select.assert_called_once_with('NDVI')
    assert preview is masked.select.return_value


def test_sites_feature_collection_names_each_site(fake_ee):
    gee.sites_feature_collection(CONFIG.sites)

    assert fake_ee.Feature.call_count == len(CONFIG.sites)
    names = [c.args[1] for c in fake_ee.Feature.call_args_list]
    assert names == [{'name': s.name} for s in CONFIG.sites]
    features = fake_ee.FeatureCollection.call_args.args[0]
    assert len(features) == len(CONFIG.sites)
