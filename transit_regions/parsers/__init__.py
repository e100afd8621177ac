"""
Parsers module for regions API responses.

- regions.py: Build Region objects from regions-v3 JSON payloads
"""

from .regions import parse_regions_response, parse_region, parse_bounds
