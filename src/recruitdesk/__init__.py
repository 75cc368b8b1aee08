"""
Recruit Desk - interview alerts, candidate filtering and outreach for a
Supabase-backed recruitment dashboard.
"""

__version__ = "0.3.0"
