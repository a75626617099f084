"""
Delivery tracker domain
Customer records, status classification and the three-stage progress tracker.

Pure logic only: nothing in this package talks to Google Sheets or Gemini.
"""

__version__ = "1.0.0"
