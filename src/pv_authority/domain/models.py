"""Singleton administrative identity."""

from dataclasses import dataclass
from datetime import datetime

from src.pv_common.errors import UnauthorizedError


@dataclass(frozen=True)
class Authority:
    admin_id: str
    created_at: datetime

    def authorize(self, caller_id: str) -> None:
        """Pure read-check: raise UnauthorizedError unless caller is the admin."""
        if caller_id != self.admin_id:
            raise UnauthorizedError(caller_id)
