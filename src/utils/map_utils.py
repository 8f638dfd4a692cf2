import folium
import leafmap.foliumap as lm

from src.data.coverage import (
    MAP_CENTER,
    MAP_ZOOM,
    STATUS_COLORS,
    ZONES,
    get_status_color,
    get_status_text,
    zone_popup_html,
)


def build_zone_map(zones=None):
    """
    Leaflet map of the coast with one status-coloured circle per mangrove zone.
    """
    zones = ZONES if zones is None else zones
    # leafmap starts from an OpenStreetMap basemap
    m = lm.Map(center=MAP_CENTER, zoom=MAP_ZOOM)

    for zone in zones:
        color = get_status_color(zone.status)
        folium.Circle(
            location=(zone.lat, zone.lng),
            radius=zone.radius_m,
            color=color,
            fill=True,
            fill_color=color,
            fill_opacity=0.3,
            weight=2,
            popup=folium.Popup(zone_popup_html(zone), max_width=320),
            tooltip=zone.name,
        ).add_to(m)

    m.add_legend(
        title="Zone status",
        labels=[get_status_text(status) for status in STATUS_COLORS],
        colors=list(STATUS_COLORS.values()),
    )
    return m
