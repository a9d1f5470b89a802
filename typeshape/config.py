"""Configuration and environment handling."""

import os
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Object validation: what to do with input keys the schema does not declare.
#   strip        ignore them and leave them out of the output (default)
#   passthrough  copy them to the output unvalidated
#   strict       report an unrecognized_keys issue
UNKNOWN_KEY_POLICIES = ("strip", "passthrough", "strict")

DEFAULT_UNKNOWN_KEYS = os.getenv("TYPESHAPE_UNKNOWN_KEYS", "strip").strip().lower()

if DEFAULT_UNKNOWN_KEYS not in UNKNOWN_KEY_POLICIES:
    print(
        f"WARNING: TYPESHAPE_UNKNOWN_KEYS={DEFAULT_UNKNOWN_KEYS!r} is not one of "
        f"{', '.join(UNKNOWN_KEY_POLICIES)}; falling back to 'strip'.",
        file=sys.stderr,
    )
    DEFAULT_UNKNOWN_KEYS = "strip"

# Logging (applied by the CLI through logging_config.setup_logging)
LOG_LEVEL = os.getenv("TYPESHAPE_LOG_LEVEL", "WARNING").upper()
LOG_FILE = os.getenv("TYPESHAPE_LOG_FILE") or None

# Where load_schema() looks for named schema documents
SCHEMAS_DIR = Path(os.getenv("TYPESHAPE_SCHEMAS_DIR", "schemas"))
