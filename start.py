#!/usr/bin/env python3
from __future__ import annotations

import os
import sys

ROOT = os.path.dirname(os.path.abspath(__file__))
APP = os.path.join("services", "ui", "app.py")

# Pages import ``services.*``; make the repo root importable for the Streamlit process.
os.environ["PYTHONPATH"] = os.pathsep.join(p for p in (ROOT, os.environ.get("PYTHONPATH")) if p)
os.chdir(ROOT)

print(f"▶️ Starting Streamlit UI ({APP})")
os.execvp("streamlit", ["streamlit", "run", APP, *sys.argv[1:]])
