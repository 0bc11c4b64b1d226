"""Trust assessment scoring engine.

Sub-modules:
- scorer        – raw responses → risk / strength indices
- ranking       – top-3 tie-break, severity buckets, density pattern
- architecture  – strength tiers, culture patterns, trust bridges
- relationships – risk ↔ strength tension, compensation, landscape
- report        – frozen aggregate of all of the above
"""
