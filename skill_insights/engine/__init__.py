"""Analytics engine.

Sub-modules:
- scale_order   – level label → rank, catalog ordering helpers
- proficiency   – skill statistics, team strengths, gaps, member benchmarks
- engagement    – current client resolution from engagement history
- availability  – talent-pool counts and client groupings
"""
