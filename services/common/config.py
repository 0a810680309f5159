# services/common/config.py
from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parents[2]
load_dotenv(BASE_DIR / ".env")

APP_NAME = "POC Planner"
APP_VERSION = "1.2.0"

# ─────────────────────────────────────────────────────────────
# Store
# ─────────────────────────────────────────────────────────────
STORE_BACKEND = os.getenv("POC_STORE_BACKEND", "local").strip().lower()
LOCAL_STORE_DIR = Path(os.getenv("POC_LOCAL_STORE_DIR", str(BASE_DIR / ".poc_store")))
GOOGLE_CLOUD_PROJECT = os.getenv("GOOGLE_CLOUD_PROJECT", "")
GOOGLE_APPLICATION_CREDENTIALS = os.getenv("GOOGLE_APPLICATION_CREDENTIALS")

SOLUTIONS_COLLECTION = "solutions"
USE_CASES_COLLECTION = "useCases"
SOLUTION_PREREQS_COLLECTION = "solutionPrerequisites"
LEGACY_PREREQS_COLLECTION = "prerequisites"
POC_PLANS_COLLECTION = "pocPlans"

# ─────────────────────────────────────────────────────────────
# UI / logging
# ─────────────────────────────────────────────────────────────
UI_THEME = os.getenv("POC_UI_THEME", "dark")
LOG_LEVEL = os.getenv("POC_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(level=level or LOG_LEVEL, format=LOG_FORMAT)
