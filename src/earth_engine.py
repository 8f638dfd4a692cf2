import ee
import os
from loguru import logger

from mangrove_watch.config import CONFIG


def authenticate():
    """
    Initializes Earth Engine, trying in turn:
    1. the project named in the environment (default GEE_PROJECT_ID)
    2. the service account named in the environment, with the configured key file
    3. the interactive browser flow
    """
    project = os.getenv(CONFIG.gee.project_env)
    try:
        ee.Initialize(project=project)
        logger.info(f"Earth Engine initialized for project {project}.")
        return
    except Exception as e:
        logger.info(f"Project initialization failed, trying the service account... {e}")

    service_account = os.getenv(CONFIG.gee.service_account_env)
    key_file = CONFIG.gee.private_key_file
    try:
        credentials = ee.ServiceAccountCredentials(service_account, key_file)
        ee.Initialize(credentials)
        logger.info(f"Earth Engine initialized with service account {service_account}.")
    except Exception as e:
        logger.error(f"Service account {service_account} with key {key_file} failed: {e}")
        ee.Authenticate()
        ee.Initialize()
