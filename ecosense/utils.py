"""
EcoSense AI - Shared helpers
"""

import math


def round_half_up(value, digits=0):
    """Round like the frontend does (.5 always goes up), not banker's rounding"""
    factor = 10 ** digits
    rounded = math.floor(value * factor + 0.5) / factor
    return int(rounded) if digits == 0 else rounded


def capitalize(text):
    """Upper-case the first character only, leaving the rest untouched"""
    return text[:1].upper() + text[1:] if text else text
