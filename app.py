# app.py - Bakery Dashboard Main Entry Point
import streamlit as st
from bakery.auth import AuthManager
from bakery.layout import render_sidebar
import logging

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Page configuration
st.set_page_config(
    page_title="Bakery Dashboard",
    page_icon="🥐",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Custom CSS
st.markdown("""
<style>
    .main-header {
        font-size: 2.5rem;
        font-weight: bold;
        margin-bottom: 1rem;
        color: #b5651d;
    }
    .info-box {
        padding: 1rem;
        border-radius: 0.5rem;
        background-color: #fdf5ec;
        margin-bottom: 1rem;
    }
</style>
""", unsafe_allow_html=True)

# Initialize authentication manager
auth = AuthManager()

# Check if user is logged in
if not auth.check_session():
    # Login Page
    st.markdown('<p class="main-header">🥐 Bakery Dashboard</p>', unsafe_allow_html=True)

    # Center the login form
    col1, col2, col3 = st.columns([1, 2, 1])

    with col2:
        with st.form("login_form", clear_on_submit=True):
            st.markdown("#### Login")
            username = st.text_input("Username", placeholder="Enter your username")
            password = st.text_input("Password", type="password", placeholder="Enter your password")

            submit = st.form_submit_button("🔐 Login", type="primary", use_container_width=True)

            if submit:
                if username and password:
                    success, user_info = auth.authenticate(username, password)

                    if success:
                        auth.login(user_info)
                        st.rerun()
                    else:
                        st.error(user_info.get("error", "Authentication failed"))
                else:
                    st.warning("Please enter both username and password")

        with st.expander("ℹ️ Login Help"):
            st.info("""
            - Ask the shop owner for the dashboard login
            - Session expires after 8 hours
            """)
else:
    # Main Application (when logged in)
    st.markdown('<p class="main-header">🥐 Bakery Dashboard</p>', unsafe_allow_html=True)

    render_sidebar(auth)

    st.markdown(f"## Welcome, {auth.get_user_display_name()}")

    # Quick actions
    st.markdown("### 🚀 Quick Actions")
    col1, col2, col3, col4 = st.columns(4)

    actions = [
        (col1, "📋 Orders", "Take orders, track payment and delivery",
         "Go to Orders →", "pages/1_📋_Orders.py", "btn_orders"),
        (col2, "💰 Sales", "Revenue per day and per baker, unpaid orders",
         "View Sales →", "pages/2_💰_Sales.py", "btn_sales"),
        (col3, "🏭 Production", "What to bake for each order date",
         "Go to Production →", "pages/3_🏭_Production.py", "btn_production"),
        (col4, "🍞 Menu", "Current products and prices",
         "View Menu →", "pages/4_🍞_Menu.py", "btn_menu"),
    ]

    for column, title, description, button_label, page, key in actions:
        with column:
            st.markdown('<div class="info-box">', unsafe_allow_html=True)
            st.markdown(f"#### {title}")
            st.markdown(description)
            if st.button(button_label, key=key, use_container_width=True):
                st.switch_page(page)
            st.markdown('</div>', unsafe_allow_html=True)

    # Footer
    st.markdown("---")
    st.markdown(
        """
        <div style='text-align: center; color: #888;'>
        Bakery Dashboard v1.0
        </div>
        """,
        unsafe_allow_html=True
    )
