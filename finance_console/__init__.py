"""
Cash Flow Management Console

Streamlit administrative console for departments, budgets, cash flows and
transactions backed by the finance REST API.
"""

__version__ = "1.0.0"
__author__ = "Cash Flow Team"
