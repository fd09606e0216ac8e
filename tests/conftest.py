import logging
import os
from datetime import datetime

import pytest

# Set test environment variables
os.environ["LIFE_WEEKS_ENVIRONMENT"] = "test"
os.environ["LIFE_WEEKS_LOG_LEVEL"] = "WARNING"
os.environ["LIFE_WEEKS_LOG_TO_FILE"] = "false"


@pytest.fixture(autouse=True)
def _strip_file_handlers():
    """Remove file handlers from root logger so tests never write to logs/app.log."""
    root = logging.getLogger()
    saved = [h for h in root.handlers if isinstance(h, logging.FileHandler)]
    for h in saved:
        root.removeHandler(h)
    yield
    for h in list(root.handlers):
        if isinstance(h, logging.FileHandler):
            root.removeHandler(h)
    for h in saved:
        root.addHandler(h)


@pytest.fixture
def stats_2000():
    """Statistics for someone born 2000-01-01, observed at 2024-01-01 midnight."""
    from life_weeks.services.life_stats import compute_statistics

    return compute_statistics("2000-01-01", datetime(2024, 1, 1))


@pytest.fixture
def stats_newborn():
    """Statistics for a birthdate equal to now."""
    from life_weeks.services.life_stats import compute_statistics

    return compute_statistics("2024-01-01", datetime(2024, 1, 1))
