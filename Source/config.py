"""
Centralized configuration for Splitshare with environment
"""

import os
from decimal import Decimal

# Display settings
CURRENCY_DEFAULT = os.getenv("SPLITSHARE_DEFAULT_CURRENCY", "USD")
CURRENCY_PLACES = int(os.getenv("SPLITSHARE_CURRENCY_PLACES", "2"))

# Thresholds
SETTLEMENT_EPSILON = Decimal(os.getenv("SPLITSHARE_SETTLEMENT_EPSILON", "0.01"))
SUM_TOLERANCE = float(os.getenv("SPLITSHARE_SUM_TOLERANCE", "1e-9"))

# Runtime settings
LOG_LEVEL = os.getenv("SPLITSHARE_LOG_LEVEL", "WARNING").upper()
EXPORT_DIR = os.getenv("SPLITSHARE_EXPORT_DIR", ".")
