"""
Contact Pricing Package

Tiered subscription pricing for contact-count volumes.
Resolves a quote using Volume → Plan Tier → Overage Blocks pipeline with a
consultation fallback above the largest tier.
"""

__version__ = "1.0.0"
