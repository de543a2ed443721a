# bakery/layout.py
"""
Page chrome shared by every page: sidebar navigation, user box, logout,
and the page header with a refresh button
"""

import streamlit as st

from .auth import AuthManager

NAV_LINKS = [
    ("pages/1_📋_Orders.py", "Orders", "📋"),
    ("pages/2_💰_Sales.py", "Sales", "💰"),
    ("pages/3_🏭_Production.py", "Production", "🏭"),
    ("pages/4_🍞_Menu.py", "Menu", "🍞"),
]


def render_sidebar(auth: AuthManager):
    """Sidebar with navigation and the logged-in user"""
    session = auth.get_session()

    with st.sidebar:
        if session:
            st.markdown(f"### 👤 {session.display_name}")
            st.caption(f"Logged in {session.login_time:%b %d, %H:%M} · "
                       f"expires {session.expires_at:%b %d, %H:%M}")
            st.markdown("---")

        for path, label, icon in NAV_LINKS:
            st.page_link(path, label=label, icon=icon)

        st.markdown("---")
        if st.button("🚪 Logout", use_container_width=True, key="sidebar_logout"):
            auth.logout()
            st.switch_page("app.py")


def render_header(title: str):
    """Page title with a refresh button"""
    col1, col2 = st.columns([4, 1])

    with col1:
        st.title(title)

    with col2:
        if st.button("🔄 Refresh", use_container_width=True, key="header_refresh"):
            st.cache_data.clear()
            st.rerun()
