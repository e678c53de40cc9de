"""
Financial Planner - Source Package

Turns spreadsheet grids (portfolio holdings and a hierarchical
financial plan) into typed records and monthly summaries.

DESIGN PRINCIPLES:
1. Parsing never throws on bad data - it degrades to zero/skip
2. Degradation is reported, never hidden (parse issues)
3. Flows are summed, snapshots are last-observed-wins
4. Input order is trusted, and flagged when it looks wrong
5. Sheet access is swappable
"""

__version__ = "1.0.0"
__author__ = "Financial Planner Team"
