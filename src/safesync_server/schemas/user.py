"""User-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field

from safesync_server.models import User


class RegisterRequest(BaseModel):
    """Schema for account registration."""

    username: str = Field(..., description="Unique, case-sensitive username")
    password: str = Field(..., description="Plaintext password; only its hash is stored")
    publickey1: str | None = Field(None, description="Opaque public key blob")
    publickey2: str | None = Field(None, description="Opaque public key blob")
    publickey3: str | None = Field(None, description="Opaque public key blob")
    publickey4: str | None = Field(None, description="Opaque public key blob")

    @property
    def public_keys(self) -> list[str | None]:
        """Return the supplied keys in slot order."""
        return [self.publickey1, self.publickey2, self.publickey3, self.publickey4]


class UserResponse(BaseModel):
    """Public view of a user. Never includes the password hash."""

    id: int
    username: str
    publickey1: str = ""
    publickey2: str = ""
    publickey3: str = ""
    publickey4: str = ""

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        """Build the response from an ORM row."""
        return cls(id=user.id, username=user.username, **user.public_keys)


class LoginRequest(BaseModel):
    """Schema for login submissions."""

    username: str = Field(..., description="Registered username")
    password: str = Field(..., description="Plaintext password")


class IdentitySummary(BaseModel):
    """Minimal identity returned after login; public keys are not included."""

    id: int
    username: str

    model_config = ConfigDict(from_attributes=True)


class LoginResponse(BaseModel):
    """Response returned after successful login."""

    success: bool = True
    message: str = "Login successful"
    data: IdentitySummary
    access_token: str = Field(..., description="Session token for the Authorization header")
    token_type: str = Field("bearer", description="Token type (always 'bearer')")


class PublicKeysResponse(BaseModel):
    """The four public key slots of a user."""

    publickey1: str
    publickey2: str
    publickey3: str
    publickey4: str
