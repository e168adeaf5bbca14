from pydantic import BaseModel

from src.pv_authority.domain.models import Authority


class AuthorityResponse(BaseModel):
    admin_id: str
    created_at: str

    @classmethod
    def from_domain(cls, authority: Authority) -> "AuthorityResponse":
        return cls(admin_id=authority.admin_id, created_at=authority.created_at.isoformat())
