"""
Authentication UI components.
"""

from typing import Dict, Optional

import streamlit as st

from ..api.client import ApiError
from ..models.user import UserRole
from ..services.auth_service import AuthService
from ..services.error_handler import get_error_handler
from ..services.validators import ValidationError
from .components import UIComponents


class AuthComponents:
    """Authentication-related UI components."""

    @staticmethod
    def login_form() -> Optional[Dict[str, str]]:
        """Display login form and return credentials if submitted."""
        with st.form("login_form"):
            st.subheader("🔐 Login")

            email = st.text_input("Email", placeholder="user@example.com")
            password = st.text_input("Password", type="password")

            submitted = st.form_submit_button("Login", type="primary")

            if submitted:
                if not email or not password:
                    st.error("Please enter both email and password")
                    return None

                return {"email": email.lower().strip(), "password": password}

        return None

    @staticmethod
    def register_form() -> Optional[Dict[str, str]]:
        """Display registration form and return user data if submitted."""
        with st.form("register_form"):
            st.subheader("📝 Create Account")

            full_name = st.text_input("Full name")
            email = st.text_input("Email", placeholder="user@example.com")
            role = st.selectbox("Role", options=[role.value for role in UserRole], index=1)
            password = st.text_input("Password", type="password")
            confirm_password = st.text_input("Confirm Password", type="password")

            submitted = st.form_submit_button("Create Account", type="primary")

            if submitted:
                if not full_name or not email or not password or not confirm_password:
                    st.error("Please fill in all fields")
                    return None

                if password != confirm_password:
                    st.error("Passwords do not match")
                    return None

                return {"full_name": full_name, "email": email.lower().strip(), "password": password, "role": role}

        return None

    @staticmethod
    def require_authentication(auth: AuthService) -> None:
        """Show login/register and stop the script until a token is stored."""
        if auth.is_authenticated():
            return

        UIComponents.flush_notifications()
        st.info("Please log in to access the console")

        tab1, tab2 = st.tabs(["Login", "Register"])

        with tab1:
            credentials = AuthComponents.login_form()
            if credentials:
                try:
                    user = auth.login(credentials["email"], credentials["password"])
                except (ApiError, ValidationError) as e:
                    UIComponents.show_error(get_error_handler().handle_exception(e, context="login"))
                else:
                    UIComponents.queue_notification(f"Welcome back, {user.display_name}!", "success")
                    st.rerun()

        with tab2:
            registration = AuthComponents.register_form()
            if registration:
                try:
                    auth.register(**registration)
                except (ApiError, ValidationError) as e:
                    UIComponents.show_error(get_error_handler().handle_exception(e, context="register"))
                else:
                    st.success("Account created successfully! Please log in.")

        st.stop()

    @staticmethod
    def user_info_sidebar(auth: AuthService) -> None:
        """Display user info in sidebar."""
        user = auth.get_user()
        if not user:
            return

        with st.sidebar:
            st.markdown("---")
            st.markdown("**Logged in as:**")
            st.markdown(f"👤 {user.display_name}")
            st.markdown(f"📧 {user.email}")
            if user.role:
                st.caption(user.role.title())

            if st.button("Logout", type="secondary"):
                auth.logout()
                st.rerun()
