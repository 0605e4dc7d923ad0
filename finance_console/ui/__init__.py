"""
UI Components

This module contains reusable UI components and helpers
for the Streamlit application.
"""

from .auth import AuthComponents
from .components import UIComponents
from .forms import FormComponents
from .tables import Column, TableComponents

__all__ = ["AuthComponents", "UIComponents", "FormComponents", "Column", "TableComponents"]
