import os

import ee
import pandas as pd
import streamlit as st
import matplotlib.pyplot as plt
from dotenv import load_dotenv

from mangrove_watch.config import CONFIG
from src.earth_engine import authenticate
from src.data.gee_functions import compute_site_stats
from src.utils.visualization import plot_site_indices, load_for_display

st.set_page_config(page_title="Kenya Mangrove Watch - Indices", layout="wide")

st.title("Vegetation and moisture indices")
st.markdown(
    "Mean **NDVI**, **EVI** and **NDMI** of Sentinel-2 yearly composites, "
    "masked to the Global Mangrove Watch extent of each site."
)

load_dotenv()

default_project = os.getenv("GEE_PROJECT_ID", "")
default_service_account = os.getenv("GEE_SERVICE_ACCOUNT", "")

with st.expander("Google Earth Engine Credentials", expanded=not default_project):
    if not default_project:
        st.warning("Credentials not found in .env file. Please enter them below. Also create a .private-key.json file for your [service account](https://developers.google.com/earth-engine/guides/service_account).")

    project_id = st.text_input("GEE Project ID", value=default_project)
    service_account = st.text_input("GEE Service Account", value=default_service_account)

    # Update environment variables so authenticate() uses the user input
    os.environ["GEE_PROJECT_ID"] = project_id
    os.environ["GEE_SERVICE_ACCOUNT"] = service_account

credentials_present = bool(os.getenv("GEE_PROJECT_ID"))

if 'stats' not in st.session_state:
    st.session_state['stats'] = None
    if os.path.exists(CONFIG.STATS_FILE):
        st.session_state['stats'] = pd.read_csv(CONFIG.STATS_FILE)

if st.button("Run analysis on Earth Engine", disabled=not credentials_present):
    with st.spinner("Building composites and reducing over mangroves..."):
        try:
            authenticate()
            df = compute_site_stats()
            os.makedirs(os.path.dirname(CONFIG.STATS_FILE), exist_ok=True)
            df.to_csv(CONFIG.STATS_FILE, index=False)
            st.session_state['stats'] = df
            st.success("Analysis complete.")
        except ee.EEException as e:
            st.error(f"Earth Engine Error: {e}.\n\nPlease check your credentials in the 'Google Earth Engine Credentials' section above.")

df = st.session_state['stats']
if df is None:
    st.warning(f"No statistics found at `{CONFIG.STATS_FILE}`. Run the analysis or `python -m src.analysis stats`.")
    st.stop()

st.header("Per-site means by year")
st.dataframe(df, hide_index=True)

missing = df[df['pixels'] == 0]
if not missing.empty:
    st.caption("Rows with 0 pixels had no cloud-free imagery for that year.")

cols = st.columns(2)
for i, site in enumerate(df['site'].unique()):
    fig = plot_site_indices(df, site)
    cols[i % 2].pyplot(fig)
    plt.close(fig)

st.header("NDVI preview")
preview_path = os.path.join(CONFIG.PREVIEW_DIR, f"{CONFIG.preview.site}_{CONFIG.preview.year}_ndvi.tif")
if os.path.exists(preview_path):
    img = load_for_display(preview_path, CONFIG.preview.palette, CONFIG.preview.min, CONFIG.preview.max)
    st.image(img, caption=f"NDVI {CONFIG.preview.year} over mangroves ({CONFIG.preview.site})", width=512)
else:
    st.info("No preview exported yet. Run `python -m src.analysis preview`.")
