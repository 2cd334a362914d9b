"""
Admin credential verification and signed admin tokens.

The password is checked once at login; afterwards admin requests carry a
short-lived token signed with the application secret. Callers turn a
token into an is_admin boolean; the raw password never reaches the core.
"""
import hmac
from typing import Optional

from itsdangerous import BadSignature, URLSafeTimedSerializer
from werkzeug.security import check_password_hash, generate_password_hash

TOKEN_SALT = 'admin-token'
DEFAULT_TOKEN_MAX_AGE = 8 * 60 * 60


class AdminAuth:
    def __init__(self, secret_key, password_hash: Optional[str] = None,
                 max_age: int = DEFAULT_TOKEN_MAX_AGE):
        self.password_hash = password_hash
        self.max_age = max_age
        self._serializer = URLSafeTimedSerializer(secret_key, salt=TOKEN_SALT)

    @classmethod
    def from_password(cls, secret_key, password: str, max_age: int = DEFAULT_TOKEN_MAX_AGE):
        return cls(secret_key, generate_password_hash(password), max_age)

    @property
    def enabled(self) -> bool:
        return bool(self.password_hash)

    def check_password(self, password: str) -> bool:
        if not self.enabled or not password:
            return False
        return check_password_hash(self.password_hash, password)

    def issue_token(self) -> str:
        return self._serializer.dumps({'role': 'admin'})

    def verify_token(self, token: str) -> bool:
        """True only for an unexpired token signed by this application."""
        if not self.enabled or not token:
            return False
        try:
            data = self._serializer.loads(token, max_age=self.max_age)
        except BadSignature:
            return False
        return isinstance(data, dict) and hmac.compare_digest(str(data.get('role', '')), 'admin')
