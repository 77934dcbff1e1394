"""
Configuration
=============
Loads environment variables from .env file using python-dotenv.

Environment Variables:
    EXPECTED_ISSUES_PATH  — Baseline file of known issues (default: expected_issues.json)
    STRESS_TESTER_CONFIG  — Config identifier of the current run (default: main)
    LOG_LEVEL             — Logging level name (default: INFO)
    LOG_DIR               — Directory for dated log files (default: unset, console only)

Config Identifier:
    Every expected issue lists the configs it applies to. A run only consults
    the records whose applicableConfigs contain STRESS_TESTER_CONFIG.
"""
import logging
import os
from dotenv import load_dotenv

load_dotenv()

EXPECTED_ISSUES_PATH = os.getenv("EXPECTED_ISSUES_PATH", "expected_issues.json")
STRESS_TESTER_CONFIG = os.getenv("STRESS_TESTER_CONFIG", "main")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = os.getenv("LOG_DIR", "")


def log_level() -> int:
    """Resolve LOG_LEVEL to a logging constant, falling back to INFO."""
    level = logging.getLevelName(LOG_LEVEL)
    return level if isinstance(level, int) else logging.INFO
