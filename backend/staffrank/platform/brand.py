"""Centralized brand configuration for user-facing copy."""

BRAND_NAME = "BDZONE"
BRAND_PRODUCT_NAME = "Staff Ranking Dashboard"
BRAND_APP_DESCRIPTION = "Staff performance grading and weighted score ledger for the BDZONE server"
