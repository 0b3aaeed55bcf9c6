from pydantic import BaseModel
from typing import List, Literal, Optional

OAuthProvider = Literal["google", "facebook"]


class LoginRequest(BaseModel):
    provider: OAuthProvider


class LoginPageResponse(BaseModel):
    providers: List[str]
    message: Optional[str] = None
