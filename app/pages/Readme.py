import streamlit as st

st.set_page_config(page_title="Kenya Mangrove Watch - README", layout="wide")

st.title("About Kenya Mangrove Watch")

st.header("Goal")
st.markdown("""
**Kenya Mangrove Watch** brings together national mangrove coverage figures and a satellite view of
vegetation health at four coastal sites: Lamu Archipelago, Kilifi Creek, Tana Delta and Mtwapa Creek.
""")

st.info(" Coverage figures for 2021-2024 are estimates and are shown as such.", icon="💡")

st.header("Data Used")
st.markdown("""
*   **Coverage tables:** national and Lamu mangrove area in hectares, entered by hand from published reports.
*   **Sentinel-2 Surface Reflectance:** yearly median composites (scenes under 50% cloud), masked with the
    scene classification band to drop cloud shadow, clouds, cirrus and snow.
*   **Global Mangrove Watch v3:** mangrove extent vectors for 2010 (used up to 2015) and 2020, so indices
    are averaged over mangrove pixels only.
""")

st.header("Indices")
st.markdown(r"""
*   **NDVI** $= \frac{NIR - RED}{NIR + RED}$ (B8, B4)
*   **EVI** $= 2.5 \cdot \frac{NIR - RED}{NIR + 6 RED - 7.5 BLUE + 1}$ (B8, B4, B2)
*   **NDMI** $= \frac{NIR - SWIR1}{NIR + SWIR1}$ (B8, B11)

A site/year without any usable scene is reported with empty indices and a pixel count of 0.
""")

st.header("How to Use")
st.markdown("""
1.  **Home:** pick a year in the sidebar to update the coverage cards, browse the map and zone cards.
2.  **Indices:** enter Earth Engine credentials and run the analysis, or view the last saved results.
3.  **Command line:** `python -m src.analysis stats` and `python -m src.analysis preview` produce the same
    table, the charts and an NDVI preview map.
""")
