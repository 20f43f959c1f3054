"""
Order Tracker - order validation and persistence service
"""
__version__ = "1.0.0"
