#!/usr/bin/env python3
"""
Script for running the frontend.
"""

import subprocess
import sys
from pathlib import Path

APP_PATH = Path(__file__).parent / "flight_planner" / "app.py"


def run_frontend():
    """Run the flight planner Streamlit frontend."""
    print("🚀 Starting Flight Planner Frontend...")
    print("📍 Frontend: http://localhost:8501")
    print("-" * 40)

    try:
        subprocess.run(
            [
                sys.executable,
                "-m",
                "streamlit",
                "run",
                str(APP_PATH),
                "--server.port=8501",
                "--server.address=0.0.0.0",
            ],
            check=True,
        )
    except KeyboardInterrupt:
        print("\n👋 Frontend stopped")
    except subprocess.CalledProcessError as e:
        print(f"❌ Frontend error: {e}")
        sys.exit(1)
