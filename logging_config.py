#!/usr/bin/env python3
"""
Logging Configuration for the court availability scraper
Console output plus rotating log files under logs/latest_log
"""

import os
import shutil
import logging
import logging.handlers
from datetime import datetime

from infrastructure.settings import get_settings

PRODUCTION_MODE = get_settings().production_mode

# Define the log directory to be a fixed 'latest_log'
LOG_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'logs', 'latest_log')

# Component loggers that get their levels tuned together
SCRAPER_LOGGERS = (
    'Main',
    'scraping',
    'automation.navigation',
    'automation.availability',
    'automation.browser',
    'domain',
)


def _clear_log_dir() -> None:
    if not os.path.exists(LOG_DIR):
        return
    for filename in os.listdir(LOG_DIR):
        file_path = os.path.join(LOG_DIR, filename)
        try:
            if os.path.isfile(file_path) or os.path.islink(file_path):
                os.unlink(file_path)
            elif os.path.isdir(file_path):
                shutil.rmtree(file_path)
        except OSError as e:
            print(f'Failed to delete {file_path}. Reason: {e}')


def setup_logging() -> None:
    """
    Set up console and rotating file handlers.
    Previous logs in the 'latest_log' directory are cleared first.
    """
    _clear_log_dir()
    os.makedirs(LOG_DIR, exist_ok=True)

    # Log file paths
    MAIN_LOG_FILE = os.path.join(LOG_DIR, 'scraper.log')
    DEBUG_LOG_FILE = os.path.join(LOG_DIR, 'scraper_debug.log')
    ERROR_LOG_FILE = os.path.join(LOG_DIR, 'scraper_errors.log')
    RUNS_LOG_FILE = os.path.join(LOG_DIR, 'scrape_runs.log')

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.WARNING if PRODUCTION_MODE else logging.DEBUG)
    root_logger.handlers = []

    # Detailed formatter with file, line, and function information
    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d in %(funcName)s()] - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING if PRODUCTION_MODE else logging.INFO)
    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    main_file_handler = logging.handlers.RotatingFileHandler(
        MAIN_LOG_FILE,
        maxBytes=10*1024*1024,  # 10MB
        backupCount=5,
        encoding='utf-8'
    )
    main_file_handler.setLevel(logging.WARNING if PRODUCTION_MODE else logging.INFO)
    main_file_handler.setFormatter(detailed_formatter)
    root_logger.addHandler(main_file_handler)

    # Debug log only outside production
    if not PRODUCTION_MODE:
        debug_file_handler = logging.handlers.RotatingFileHandler(
            DEBUG_LOG_FILE,
            maxBytes=50*1024*1024,  # 50MB
            backupCount=3,
            encoding='utf-8'
        )
        debug_file_handler.setLevel(logging.DEBUG)
        debug_file_handler.setFormatter(detailed_formatter)
        root_logger.addHandler(debug_file_handler)

    error_file_handler = logging.handlers.RotatingFileHandler(
        ERROR_LOG_FILE,
        maxBytes=5*1024*1024,  # 5MB
        backupCount=5,
        encoding='utf-8'
    )
    error_file_handler.setLevel(logging.ERROR)
    error_file_handler.setFormatter(detailed_formatter)
    root_logger.addHandler(error_file_handler)

    # Dedicated run log for batch progress, kept at INFO even in production
    runs_handler = logging.handlers.RotatingFileHandler(
        RUNS_LOG_FILE,
        maxBytes=20*1024*1024,  # 20MB
        backupCount=5,
        encoding='utf-8'
    )
    runs_handler.setLevel(logging.INFO if PRODUCTION_MODE else logging.DEBUG)
    runs_handler.setFormatter(detailed_formatter)
    logging.getLogger('scraping').addHandler(runs_handler)

    for name in SCRAPER_LOGGERS:
        logging.getLogger(name).setLevel(logging.INFO if PRODUCTION_MODE else logging.DEBUG)

    # Reduce noise from external libraries
    logging.getLogger('asyncio').setLevel(logging.WARNING)
    logging.getLogger('urllib3').setLevel(logging.WARNING)

    root_logger.info("="*80)
    root_logger.info(f"Scraper Logging Initialized - {datetime.now()}")
    root_logger.info(f"Production Mode: {'ON' if PRODUCTION_MODE else 'OFF'}")
    root_logger.info(f"Main log: {MAIN_LOG_FILE}")
    if not PRODUCTION_MODE:
        root_logger.info(f"Debug log: {DEBUG_LOG_FILE}")
    root_logger.info(f"Error log: {ERROR_LOG_FILE}")
    root_logger.info(f"Run log: {RUNS_LOG_FILE}")
    root_logger.info("="*80)


# Initialize logging when module is imported
setup_logging()
