"""
GeoPortfolio Core Metadata
--------------------------
Project identity shared by the API root endpoint and the Streamlit pages.
"""

from core.config import BACKEND_VERSION

__project__ = "GeoPortfolio"
__version__ = "1.0.0"
__maintainer__ = "Geospatial & Remote Sensing Engineer"

CORE_METADATA = {
    "project": __project__,
    "version": __version__,
    "api_version": BACKEND_VERSION,
    "maintainer": __maintainer__,
    "description": (
        "Portfolio and CV site with a small profile API, a contact form and "
        "three geospatial showcases: a climate digital twin, a supply-chain "
        "emission tracer and a flood & disaster layer viewer."
    ),
    "showcases": ["digital-twin", "supply-chain", "flood"],
}


def get_metadata() -> dict:
    """Return current project metadata as a dict."""
    return dict(CORE_METADATA)
