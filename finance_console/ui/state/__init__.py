"""
Per-session view state.
"""
