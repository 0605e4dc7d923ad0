import streamlit as st

from finance_console.ui.components import UIComponents
from finance_console.ui.page import init_page

container = init_page("Cash Flow Management", "💰")
settings = container.get_settings()
user = container.get_auth_service().get_user()

UIComponents.flush_notifications()

with st.sidebar:
    st.title("Navigation")
    st.markdown("Use the pages in the sidebar to manage the finance records.")

UIComponents.page_header(settings.app.page_title, icon=settings.app.page_icon)

if user:
    st.markdown(f"Welcome, **{user.display_name}**!")

st.markdown("""
This console manages the records of the finance tracking system:

- **📊 Dashboard**: Totals, department and budget type rankings, monthly trends
- **🏢 Departments**: Organisational units that own cash flows
- **🗂️ Budget Types** and **💳 Budgets**: What transactions are booked against
- **🔀 Cash Flow Types**: The hierarchy used to classify cash flows
- **💸 Cash Flows**: Cash flows per department and type
- **🧾 Transactions**: Individual bookings with amount and day

Navigate using the sidebar to explore the different sections.
""")
