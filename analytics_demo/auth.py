import time
from typing import Any, Dict, Optional

import jwt
from pydantic import BaseModel, Field, field_validator

from .config import Settings, get_settings


class UserMetadata(BaseModel):
    full_name: str
    avatar_url: Optional[str] = None


class DemoUser(BaseModel):
    id: str
    email: str
    user_metadata: UserMetadata


class JWTClaims(BaseModel):
    """Pydantic model for the claims carried by the demo access token."""

    sub: str
    email: str
    name: Optional[str] = None
    role: str = Field(default="authenticated")
    exp: int

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, v):
        role = v if isinstance(v, str) else "authenticated"
        role_map = {
            "super_admin": "super_admin",
            "SuperAdmin": "super_admin",
            "admin": "admin",
            "Admin": "admin",
            "viewer": "viewer",
            "Viewer": "viewer",
        }
        return role_map.get(role, "authenticated")


class DemoSession(BaseModel):
    user: DemoUser
    access_token: str
    token_type: str = "bearer"
    expires_at: int


class AuthService:
    """Issues the fixed demo identity and its signed access token."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()

    def demo_user(self) -> DemoUser:
        return DemoUser(
            id=self.settings.demo_user_id,
            email=self.settings.demo_user_email,
            user_metadata=UserMetadata(full_name=self.settings.demo_user_name),
        )

    def default_claims(self) -> dict:
        model = JWTClaims(
            sub=self.settings.demo_user_id,
            email=self.settings.demo_user_email,
            name=self.settings.demo_user_name,
            role="super_admin",
            exp=int(time.time()) + self.settings.session_ttl_seconds,
        )
        return model.model_dump()

    def issue_token(self, claims: Optional[dict] = None) -> str:
        return jwt.encode(claims or self.default_claims(), self.settings.jwt_secret, algorithm="HS256")

    def decode_token(self, token: str) -> JWTClaims:
        """Decode and validate a token minted by `issue_token` (HS256)."""
        options = {"require": ["exp"], "verify_exp": True}
        kwargs: Dict[str, Any] = {"algorithms": ["HS256"]}
        decoded = jwt.decode(token, self.settings.jwt_secret, options=options, **kwargs)
        return JWTClaims.model_validate(decoded)

    def session(self) -> DemoSession:
        claims = self.default_claims()
        return DemoSession(
            user=self.demo_user(),
            access_token=self.issue_token(claims),
            expires_at=claims["exp"],
        )

    def current_claims(self) -> dict:
        return self.default_claims()
