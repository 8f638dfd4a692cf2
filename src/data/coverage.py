"""
Hand-entered Kenyan mangrove coverage figures and zone descriptions shown on
the dashboard, plus the helpers that turn them into display text.
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Optional

# Share of the national total attributed to Lamu when a year has no Lamu figure
LAMU_SHARE = 0.61

STATUS_COLORS = {
    'healthy': '#2ec4b6',
    'warning': '#ff9f1c',
    'critical': '#e71d36',
}
UNKNOWN_STATUS_COLOR = '#778da9'

STATUS_TEXT = {
    'healthy': 'Stable',
    'warning': 'Restoration needed',
    'critical': 'Critical condition',
}

MAP_CENTER = (-2.5, 40.0)
MAP_ZOOM = 8

REPORT_EMAIL = 'mangrove.reports@kenya.gov'
REPORT_MESSAGE = (
    f"Thank you for your concern! Please email reports to: {REPORT_EMAIL}\n\n"
    "Under Article 69 of the Constitution, all citizens have a duty to protect the environment."
)
RESTORATION_URL = 'https://www.kws.go.ke/conservation-education/community-based-conservation'

NOT_AVAILABLE = 'Data not available'


@dataclass(frozen=True)
class CoverageRecord:
    total: int
    lamu: Optional[int] = None
    estimated: bool = False


@dataclass(frozen=True)
class Zone:
    id: str
    name: str
    status: str
    lat: float
    lng: float
    radius: float  # degrees
    coverage: int  # hectares, 0 when unknown
    health_index: float
    description: str

    @property
    def radius_m(self) -> float:
        return self.radius * 100000


@dataclass(frozen=True)
class Trend:
    previous_year: int
    percent: float
    direction: str  # 'up' or 'down'

    @property
    def arrow(self) -> str:
        return '▲' if self.direction == 'up' else '▼'

    def label(self) -> str:
        return f"{self.arrow} {self.percent}% from {self.previous_year}"

    def delta(self) -> str:
        """Signed form understood by st.metric."""
        sign = '' if self.direction == 'up' else '-'
        return f"{sign}{self.percent}% from {self.previous_year}"


COVERAGE_DATA: Dict[int, CoverageRecord] = {
    2015: CoverageRecord(total=60323, lamu=30475),
    2016: CoverageRecord(total=54430, lamu=38101),
    2017: CoverageRecord(total=61271, lamu=37650),
    2018: CoverageRecord(total=61000, lamu=29830),
    2019: CoverageRecord(total=61279, lamu=None),
    2020: CoverageRecord(total=61170, lamu=37314),
    2021: CoverageRecord(total=61300, lamu=37400, estimated=True),
    2022: CoverageRecord(total=61450, lamu=37500, estimated=True),
    2023: CoverageRecord(total=61600, lamu=37600, estimated=True),
    2024: CoverageRecord(total=61750, lamu=37700, estimated=True),
}
DEFAULT_YEAR = 2020

ZONES: List[Zone] = [
    Zone(
        id='lamu',
        name='Lamu Archipelago',
        status='healthy',
        lat=-2.2717, lng=40.9020,
        radius=0.08,
        coverage=37314,
        health_index=8.7,
        description=(
            "The largest mangrove forest in Kenya, covering over 60% of the country's total mangrove area. "
            "Home to diverse marine life and a crucial carbon sink. Lamu mangroves provide timber, fuelwood, "
            "and support beekeeping initiatives."
        ),
    ),
    Zone(
        id='kilifi',
        name='Kilifi Creek',
        status='warning',
        lat=-3.6306, lng=39.8494,
        radius=0.04,
        coverage=8536,
        health_index=6.2,
        description=(
            "Facing threats from illegal logging and salt farming. Restoration efforts ongoing through "
            "community-led initiatives like the Seatrees organization's nursery program which has created "
            "jobs while protecting against storm surges."
        ),
    ),
    Zone(
        id='tana',
        name='Tana Delta',
        status='critical',
        lat=-2.5833, lng=40.3167,
        radius=0.03,
        coverage=3260,
        health_index=4.1,
        description=(
            "Severely degraded due to upstream dam construction reducing freshwater flow. Urgent restoration "
            "needed to prevent complete loss. Conversion of areas for salt production has further contributed "
            "to decline."
        ),
    ),
    Zone(
        id='mtwapa',
        name='Mtwapa Creek',
        status='healthy',
        lat=-4.0435, lng=39.6682,
        radius=0.02,
        coverage=3771,
        health_index=7.8,
        description=(
            "Well-protected mangrove area with strong community involvement in conservation. Provides timber, "
            "tannins for leather processing, and serves as a model for sustainable use under the Forest Act's "
            "community forest associations."
        ),
    ),
    Zone(
        id='vanga',
        name='Vanga Bay',
        status='healthy',
        lat=-4.6667, lng=39.2167,
        radius=0.02,
        coverage=0,
        health_index=7.5,
        description=(
            "Important mangrove site in Kwale County, though smaller than Lamu. Part of Kenya's 600km coastline "
            "mangrove distribution mentioned in the National Mangrove Plan."
        ),
    ),
]


def get_status_color(status: str) -> str:
    return STATUS_COLORS.get(status, UNKNOWN_STATUS_COLOR)


def get_status_text(status: str) -> str:
    return STATUS_TEXT.get(status, 'Unknown')


def format_hectares(value: int) -> str:
    return f"{value:,} ha"


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def lamu_coverage(year: int) -> int:
    """Lamu hectares for a year, approximated from the national total when missing."""
    record = COVERAGE_DATA[year]
    if record.lamu:
        return record.lamu
    return round_half_up(record.total * LAMU_SHARE)


def lamu_approximation_note(year: int) -> str:
    return f"No Lamu survey for {year}: approximated as {LAMU_SHARE:.0%} of the national total."


def coverage_trend(year: int) -> Optional[Trend]:
    """Change of the national total against the previous year, if that year is known."""
    previous_year = year - 1
    if previous_year not in COVERAGE_DATA:
        return None
    current = COVERAGE_DATA[year].total
    previous = COVERAGE_DATA[previous_year].total
    change = current - previous
    percent = round(abs(change) / previous * 100, 1)
    return Trend(previous_year=previous_year, percent=percent, direction='up' if change >= 0 else 'down')


def coverage_metrics(year: int) -> dict:
    """Display values for the metric cards of the selected year."""
    record = COVERAGE_DATA[year]
    return {
        'year': year,
        'total': format_hectares(record.total),
        'lamu': format_hectares(lamu_coverage(year)),
        'lamu_approximated': not record.lamu,
        'estimated': record.estimated,
        'trend': coverage_trend(year),
    }


def get_zone(zone_id: str) -> Zone:
    for zone in ZONES:
        if zone.id == zone_id:
            return zone
    raise KeyError(zone_id)


def zone_coverage_text(zone: Zone) -> str:
    return format_hectares(zone.coverage) if zone.coverage else NOT_AVAILABLE


def zone_popup_html(zone: Zone) -> str:
    return (
        f"<h3>{zone.name}</h3>"
        f"<p>Coverage: {zone_coverage_text(zone)}</p>"
        f"<p>Health index: {zone.health_index}/10</p>"
        f"<p>{zone.description}</p>"
        f'<div class="status status-{zone.status}" style="color: {get_status_color(zone.status)}">'
        f"{get_status_text(zone.status)}</div>"
    )


def report_mailto() -> str:
    return f"mailto:{REPORT_EMAIL}?subject=Mangrove%20damage%20report"
