from __future__ import annotations

import logging

from werkzeug.security import check_password_hash

from ..core.constants import ADMIN_ACCOUNT
from ..core.exceptions import AuthenticationError

log = logging.getLogger(__name__)


class AuthService:
    """Use case: admin login against the single fixed account."""

    def __init__(self, password_hash: str):
        self._password_hash = password_hash or ""

    @property
    def account(self) -> str:
        return ADMIN_ACCOUNT

    def authenticate(self, password: str) -> str:
        try:
            ok = bool(self._password_hash) and check_password_hash(self._password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            log.warning("failed admin login")
            raise AuthenticationError("Senha incorreta")
        return ADMIN_ACCOUNT
