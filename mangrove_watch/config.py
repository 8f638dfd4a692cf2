from pathlib import Path

import os
from dotenv import load_dotenv
from loguru import logger
import sys

# Force line buffering for stderr to see logs in real-time
if hasattr(sys.stderr, "reconfigure"):
    sys.stderr.reconfigure(line_buffering=True)

from hydra import compose, initialize
from omegaconf import OmegaConf

# Load environment variables (GEE_PROJECT_ID, GEE_SERVICE_ACCOUNT) from .env if it exists
load_dotenv()

# Paths
PROJ_ROOT = Path(__file__).resolve().parents[1]
logger.info(f"PROJ_ROOT path is: {PROJ_ROOT}")

DATA_DIR = PROJ_ROOT / "data"
PROCESSED_DATA_DIR = DATA_DIR / "processed"
REPORTS_DIR = PROJ_ROOT / "reports"

STATS_FILE = PROCESSED_DATA_DIR / "mangrove_index_stats.csv"
CHARTS_DIR = REPORTS_DIR / "charts"
PREVIEW_DIR = REPORTS_DIR / "preview"

# If tqdm is installed, configure loguru with tqdm.write
# https://github.com/Delgan/loguru/issues/135
try:
    from tqdm import tqdm

    logger.remove()
    logger.add(lambda msg: tqdm.write(msg, end=""), colorize=True)
    logger.add("log.log", colorize=False, mode='a')
except ModuleNotFoundError:
    pass


def load_config():
    with initialize(config_path="../conf", version_base=None):
        cfg = compose(config_name="config")
        OmegaConf.set_struct(cfg, False)
    cfg.PROJ_ROOT = str(PROJ_ROOT)
    cfg.DATA_DIR = str(DATA_DIR)
    cfg.PROCESSED_DATA_DIR = str(PROCESSED_DATA_DIR)
    cfg.REPORTS_DIR = str(REPORTS_DIR)
    cfg.STATS_FILE = str(STATS_FILE)
    cfg.CHARTS_DIR = str(CHARTS_DIR)
    cfg.PREVIEW_DIR = str(PREVIEW_DIR)
    return cfg


def get_site(site_id: str):
    """Returns the configured AOI with the given id."""
    for site in CONFIG.sites:
        if site.id == site_id:
            return site
    raise KeyError(f"Unknown site '{site_id}'. Known sites: {[s.id for s in CONFIG.sites]}")


CONFIG = load_config()
