"""
Common setup run at the top of every Streamlit page.
"""

import streamlit as st

from ..container import Container, get_container
from ..utils.logger import setup_logging
from .auth import AuthComponents


def init_page(title: str, icon: str) -> Container:
    """Configure the page, logging and login gate; returns the session container."""
    st.set_page_config(page_title=title, page_icon=icon, layout="wide", initial_sidebar_state="expanded")

    container = get_container()
    setup_logging(container.get_settings().app)

    auth = container.get_auth_service()
    AuthComponents.require_authentication(auth)
    AuthComponents.user_info_sidebar(auth)
    return container
