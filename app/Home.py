import streamlit as st

from src.data.coverage import (
    COVERAGE_DATA,
    DEFAULT_YEAR,
    REPORT_MESSAGE,
    RESTORATION_URL,
    ZONES,
    get_status_color,
    get_status_text,
    coverage_metrics,
    lamu_approximation_note,
    report_mailto,
    zone_coverage_text,
)
from src.utils.map_utils import build_zone_map

st.set_page_config(page_title="Kenya Mangrove Watch", layout="wide")

st.title("🌿 Kenya Mangrove Watch")
st.markdown("Mangrove coverage along the Kenyan coast, zone by zone.")

st.info("👋 The **Indices** page shows the Sentinel-2 NDVI/EVI/NDMI analysis of the monitored sites.")

# --- Sidebar ---
st.sidebar.header("Coverage year")
years = sorted(COVERAGE_DATA)
year = st.sidebar.radio(
    "Year",
    years,
    index=years.index(DEFAULT_YEAR),
    horizontal=True,
    label_visibility="collapsed",
)

st.sidebar.header("Zones")
for zone in ZONES:
    color = get_status_color(zone.status)
    st.sidebar.markdown(
        f"<span style='color:{color}'>●</span> **{zone.name}** · {get_status_text(zone.status)}",
        unsafe_allow_html=True,
    )

# --- Metric cards ---
metrics = coverage_metrics(year)
trend = metrics['trend']

col1, col2 = st.columns(2)
col1.metric(
    "Total mangrove cover",
    metrics['total'],
    delta=trend.delta() if trend else None,
)
col2.metric("Lamu mangrove cover", metrics['lamu'])

if metrics['lamu_approximated']:
    col2.caption(lamu_approximation_note(year))
if metrics['estimated']:
    st.caption(f"Figures for {year} are estimates, not survey results.")

# --- Tabs ---
map_tab, zones_tab, action_tab = st.tabs(["Map", "Zones", "Take action"])

with map_tab:
    m = build_zone_map()
    m.to_streamlit(height=600)

with zones_tab:
    for zone in ZONES:
        with st.container(border=True):
            color = get_status_color(zone.status)
            st.subheader(zone.name)
            st.markdown(
                f"<span style='color:{color};font-weight:bold'>{get_status_text(zone.status)}</span>",
                unsafe_allow_html=True,
            )
            c1, c2 = st.columns(2)
            c1.write(f"**Coverage:** {zone_coverage_text(zone)}")
            c2.write(f"**Health index:** {zone.health_index}/10")
            st.write(zone.description)
            if zone.status == 'critical':
                st.link_button("Join Restoration", RESTORATION_URL)

with action_tab:
    st.markdown("Seen illegal logging, dumping or clearing of mangroves? Let the authorities know.")
    if st.button("Report damage", key="report-btn"):
        st.info(REPORT_MESSAGE)
        st.link_button("Send report by email", report_mailto())
