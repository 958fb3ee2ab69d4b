"""
config.py — Environment configuration for the script optimizer server.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env from the same folder as this file — works regardless of cwd
load_dotenv(dotenv_path=Path(__file__).parent / ".env")

SERVER_NAME = os.environ.get("SERVER_NAME", "yt-script-optimizer")
SERVER_VERSION = os.environ.get("SERVER_VERSION", "1.0.0")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
