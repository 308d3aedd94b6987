"""
API Configuration - Single Source of Truth

All endpoint, timeout and identification settings defined here.
Do not duplicate elsewhere.
"""

import os
import platform
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from googleapiclient.discovery import DISCOVERY_URI as _GOOGLE_DISCOVERY_URI

# Package root (where this file lives)
_PACKAGE_ROOT = Path(__file__).parent

# Root of all Google REST APIs. Overriding it rebinds every document and
# moves discovery onto the same host (useful against a local fake server).
DEFAULT_ROOT_URL = "https://www.googleapis.com/"
ROOT_URL = os.environ.get("GAPI_ROOT_URL", DEFAULT_ROOT_URL)

# Discovery service URL template: {api} and {apiVersion} are expanded
DISCOVERY_URI = _GOOGLE_DISCOVERY_URI

# Bundled discovery documents for static binding, named <api>.<version>.json
DOCUMENTS_DIR = _PACKAGE_ROOT / "discovery_cache" / "documents"

# Default timeout for all HTTP calls (seconds)
# Prevents indefinite hangs when APIs are slow or connections stall
API_TIMEOUT = int(os.environ.get("GAPI_TIMEOUT", 60))

# Upper bound on concurrent discovery fetches
MAX_DISCOVERY_WORKERS = 8

try:
    PACKAGE_VERSION = version("gapi-transport")
except PackageNotFoundError:
    PACKAGE_VERSION = "0.0.0"

USER_AGENT = f"gapi-transport/{PACKAGE_VERSION}"
API_CLIENT_HEADER = f"gl-python/{platform.python_version()} gdcl/{PACKAGE_VERSION}"
