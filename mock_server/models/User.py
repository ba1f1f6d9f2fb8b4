from sqlmodel import Field, SQLModel

# ==========================================
# SQLModel (Database Entity)
# ==========================================
class User(SQLModel, table=True):
    __tablename__ = "users"

    id: str = Field(primary_key=True)
    user_name: str = Field(unique=True, index=True, nullable=False) # Role key: admin, factory1..5
    role: str = Field(default="factory") # Coarse category, informational
    hashed_password: str

# ==========================================
# Pydantic Models (DTOs)
# ==========================================
class SignInRequest(SQLModel):
    userName: str
    password: str

class SignInResponse(SQLModel):
    accessToken: str
    role: str
    message: str
