from pydantic import BaseModel
from typing import Optional


class UserData(BaseModel):
    """Identity claims carried by the bearer token issued by the identity service."""
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    exp: int
    user_role: str
