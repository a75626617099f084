"""
Customer portal
Search controller and HTML views for the DNI lookup page.
"""
