"""Constants for recurshift.

This module centralizes limits and default values used throughout the application.
"""

import os

from dotenv import load_dotenv

load_dotenv()


# Batch creation
MAX_BATCH_SHIFTS = int(os.getenv("MAX_BATCH_SHIFTS", "100"))  # dates accepted into one batch

# Preview / description
DEFAULT_PREVIEW_LIMIT = 5
DEFAULT_LOCALE = os.getenv("RECURSHIFT_LOCALE", "en")
SUPPORTED_LOCALES = ("en", "pt-BR")
