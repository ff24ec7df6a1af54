"""
Environment-backed defaults.

Values come from the process environment, optionally seeded from a ``.env``
file in the working directory or the project root. Command-line flags take
precedence over everything defined here.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).resolve().parent.parent.parent / ".env"
load_dotenv(env_path)
load_dotenv()

SNMP_COMMUNITY = os.getenv("SNMP_COMMUNITY")
SNMP_VERSION = os.getenv("SNMP_VERSION", "2c")
SNMP_PORT = int(os.getenv("SNMP_PORT", "161"))
SNMP_TIMEOUT = float(os.getenv("SNMP_TIMEOUT", "15"))
SNMP_RETRIES = int(os.getenv("SNMP_RETRIES", "1"))

# Overall watchdog for one check, covering every request it makes
CHECK_TIMEOUT = float(os.getenv("CHECK_TIMEOUT", "30"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING").upper()

PORT = int(os.getenv("PORT", "8000"))
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "http://localhost:3000").split(",")
