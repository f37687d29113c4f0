from pydantic import BaseModel, EmailStr, Field, field_validator

# bcrypt only hashes the first 72 bytes and rejects anything longer
BCRYPT_MAX_BYTES = 72


class UserRegister(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=50)
    first_name: str = Field(min_length=2, max_length=100)
    last_name: str = Field(min_length=2, max_length=100)

    @field_validator("password")
    @classmethod
    def validate_password_bytes(cls, value: str) -> str:
        if len(value.encode("utf-8")) > BCRYPT_MAX_BYTES:
            raise ValueError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes when UTF-8 encoded")
        return value


class RegisteredUser(BaseModel):
    user_id: int
    email: EmailStr


class UserResponse(BaseModel):
    message: str
    user: RegisteredUser


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=50)


class Token(BaseModel):
    access_token: str
    token_type: str
