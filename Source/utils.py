#!/usr/bin/env python3
"""
Utility functions for Splitshare
"""

import math
import re
import time
import uuid
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from pathlib import Path
from typing import Dict, Optional

from config import CURRENCY_DEFAULT
from constants import CURRENCY_SYMBOLS, DECIMAL_QUANTIZE, PREFIX_CURRENCIES


def round_currency(amount: float) -> Decimal:
    """Round an amount to currency precision, halves away from zero"""
    return Decimal(str(amount)).quantize(DECIMAL_QUANTIZE, rounding=ROUND_HALF_UP)


def format_currency(amount: float, currency: str = CURRENCY_DEFAULT) -> str:
    """Format currency amount with proper symbols"""
    if isinstance(amount, bool) or not isinstance(amount, (int, float, Decimal)):
        return "0.00"

    symbol = CURRENCY_SYMBOLS.get(currency, currency)
    rounded = round_currency(amount)

    if currency in PREFIX_CURRENCIES:
        sign = "-" if rounded < 0 else ""
        return f"{sign}{symbol}{abs(rounded)}"
    else:
        return f"{rounded} {symbol}"


def round_shares(shares: Dict[str, float]) -> Dict[str, Decimal]:
    """Round every share for display, after all summation is done"""
    return {person: round_currency(amount) for person, amount in shares.items()}


def try_parse_int(value: str) -> Optional[int]:
    """Safely parse integer from string"""
    try:
        return int(value.strip())
    except (AttributeError, ValueError):
        return None


def try_parse_float(value: str) -> Optional[float]:
    """Safely parse float from string, accepting a decimal comma"""
    try:
        parsed = float(value.strip().replace(',', '.'))
    except (AttributeError, ValueError):
        return None
    return parsed if math.isfinite(parsed) else None


def try_parse_date(value: str) -> Optional[date]:
    """Parse YYYY-MM-DD date string"""
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except (AttributeError, ValueError):
        return None


def days_between(start: date, end: date) -> int:
    """Whole days between two dates, partial days counted as one"""
    if isinstance(start, datetime) and isinstance(end, datetime):
        seconds = abs((end - start).total_seconds())
        return math.ceil(seconds / 86400)
    return abs((end - start).days)


def validate_menu_choice(choice: str, valid_choices: list[str]) -> Optional[str]:
    """Validate a menu choice against allowed options"""
    if not isinstance(choice, str):
        return None
    choice = choice.strip()
    return choice if choice in set(valid_choices) else None


def generate_id(prefix: str = "bill") -> str:
    """Generate unique ID"""
    return f"{prefix}_{int(time.time() * 1000):x}{uuid.uuid4().hex[:8]}"


def sanitize_filename(filename: str) -> str:
    """Sanitize filename for safe file operations"""
    if not isinstance(filename, str):
        return "unnamed_file"

    # Remove path separators and dangerous characters
    filename = re.sub(r'[<>:"/\\|?*\x00-\x1f]', '', filename)
    filename = filename.replace(' ', '_')

    if len(filename) > 200:
        filename = filename[:200]

    if not filename.strip():
        filename = "unnamed_file"

    return filename


def ensure_directory_exists(directory: str) -> Path:
    """Ensure a directory exists, create it if it doesn't"""
    path = Path(directory)
    path.mkdir(parents=True, exist_ok=True)
    return path


def clean_text_for_display(text: str, max_length: int = 100) -> str:
    """Clean text for safe display in UI"""
    if not isinstance(text, str):
        return ""

    # Remove control characters
    text = re.sub(r'[\x00-\x1f\x7f-\x9f]', '', text)
    text = ' '.join(text.split())

    if len(text) > max_length:
        text = text[:max_length-3] + "..."

    return text
