from typing import List, Optional
from pydantic import BaseModel


class Principal(BaseModel):
    """Caller identity resolved from a bearer token."""
    subject: str
    username: Optional[str] = None
    roles: List[str] = []

    def has_any_role(self, *roles: str) -> bool:
        wanted = {role.upper() for role in roles}
        return any(role in wanted for role in self.roles)
