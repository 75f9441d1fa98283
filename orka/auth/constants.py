"""Constants for Orka authentication and configuration."""

from __future__ import annotations

# Request headers
TOKEN_HEADER = "Authorization"
LICENSE_HEADER = "orka-licensekey"

# Environment variables
ENV_API_URL = "ORKA_API_URL"
ENV_TOKEN = "ORKA_TOKEN"
ENV_LICENSE_KEY = "ORKA_LICENSE_KEY"

# Credential storage
CONFIG_DIR = ".orka"
CONFIG_FILE = "config.json"
