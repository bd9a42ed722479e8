"""Sitzungskontext: Token und Benutzer werden explizit weitergereicht."""

from typing import Optional


class SessionContext:
    """Hält Token und Benutzerprofil der aktuellen Sitzung."""

    def __init__(self, token: Optional[str] = None, user: Optional[dict] = None) -> None:
        self.token = token
        self.user = user

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def auth_headers(self) -> dict[str, str]:
        """Authorization-Header, leer ohne Token."""
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def clear(self) -> None:
        """Verwirft Token und Benutzer (z.B. nach HTTP 401)."""
        self.token = None
        self.user = None

    def __repr__(self) -> str:
        state = "angemeldet" if self.is_authenticated else "anonym"
        return f"SessionContext({state})"
