"""Shared engine instance for the API process."""
from ..engine.pricing_engine import get_engine

engine = get_engine()
