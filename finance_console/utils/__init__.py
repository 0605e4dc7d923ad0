"""
Shared utilities: currency formatting and logging.
"""
