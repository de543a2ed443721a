# bakery/auth.py
"""
Authentication and session management

The logged-in user is held as a UserSession in Streamlit's server-side
session state, never in browser storage. Sessions expire after
APP_CONFIG['SESSION_TIMEOUT_HOURS'].

Version: 1.0.0
"""

import hashlib
import hmac
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, MutableMapping, Optional, Tuple

import streamlit as st

from .config import APP_CONFIG, AUTH_CONFIG
from .common import get_local_now

logger = logging.getLogger(__name__)

SESSION_KEY = 'user_session'
DEFAULT_HASH_ITERATIONS = 600_000


@dataclass
class UserSession:
    """Logged-in user"""
    username: str
    display_name: str
    login_time: datetime
    expires_at: datetime

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or get_local_now()) >= self.expires_at


def hash_password(password: str, salt: str,
                  iterations: int = DEFAULT_HASH_ITERATIONS) -> str:
    """Hex PBKDF2-HMAC-SHA256 digest, the format of APP_PASSWORD_HASH"""
    return hashlib.pbkdf2_hmac(
        'sha256', password.encode('utf-8'), salt.encode('utf-8'), iterations
    ).hex()


class AuthManager:
    """Login, logout and session checks for every page"""

    def __init__(self, session_state: Optional[MutableMapping] = None,
                 auth_config: Optional[Dict[str, Any]] = None,
                 timeout_hours: Optional[int] = None):
        self.session_state = session_state if session_state is not None else st.session_state
        self.auth_config = auth_config or AUTH_CONFIG
        self.timeout = timedelta(hours=timeout_hours or APP_CONFIG.get('SESSION_TIMEOUT_HOURS', 8))

    # ==================== Login ====================

    def authenticate(self, username: str, password: str) -> Tuple[bool, Dict[str, Any]]:
        """
        Check credentials against configuration

        Returns:
            Tuple of (success, user_info); user_info carries 'error' on failure
        """
        expected_hash = self.auth_config.get('password_hash', '')
        salt = self.auth_config.get('password_salt', '')
        iterations = self.auth_config.get('hash_iterations') or DEFAULT_HASH_ITERATIONS
        if not expected_hash or not salt:
            logger.error("❌ Login refused: APP_PASSWORD_HASH or APP_PASSWORD_SALT is not configured")
            return False, {'error': 'Login is not configured. Please contact the admin.'}

        username_ok = hmac.compare_digest(
            username.strip().encode('utf-8'),
            self.auth_config.get('username', '').encode('utf-8')
        )
        password_ok = hmac.compare_digest(hash_password(password, salt, iterations).encode('utf-8'),
                                          expected_hash.encode('utf-8'))

        if not (username_ok and password_ok):
            logger.warning(f"Failed login attempt for user {username.strip()!r}")
            return False, {'error': 'Invalid username or password'}

        return True, {
            'username': username.strip(),
            'display_name': self.auth_config.get('display_name') or username.strip(),
        }

    def login(self, user_info: Dict[str, Any]) -> UserSession:
        """Start a session for an authenticated user"""
        now = get_local_now()
        session = UserSession(
            username=user_info['username'],
            display_name=user_info.get('display_name') or user_info['username'],
            login_time=now,
            expires_at=now + self.timeout,
        )
        self.session_state[SESSION_KEY] = session
        logger.info(f"✅ User {session.username} logged in (expires {session.expires_at:%Y-%m-%d %H:%M})")
        return session

    def logout(self):
        """End the current session"""
        session = self.session_state.pop(SESSION_KEY, None)
        if session is not None:
            logger.info(f"User {session.username} logged out")

    # ==================== Session Checks ====================

    def get_session(self) -> Optional[UserSession]:
        """Current session, None if anonymous or expired"""
        session = self.session_state.get(SESSION_KEY)
        if session is None:
            return None

        if session.is_expired():
            logger.info(f"Session for {session.username} expired")
            self.logout()
            return None

        return session

    def check_session(self) -> bool:
        return self.get_session() is not None

    def get_user_display_name(self) -> str:
        session = self.get_session()
        return session.display_name if session else ''

    def require_auth(self):
        """Stop the page unless a valid session exists"""
        if self.check_session():
            return

        st.warning("🔒 Please log in to continue")
        st.page_link("app.py", label="Go to login", icon="🔐")
        st.stop()
