from pydantic import BaseModel, ConfigDict


class RegisterReq(BaseModel):
    model_config = ConfigDict(extra="forbid")

    username: str
    email: str
    password: str

class LoginReq(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: str
    password: str

class UserPublic(BaseModel):
    id: str
    username: str
    email: str

class LoginResp(BaseModel):
    token: str
    user: UserPublic
