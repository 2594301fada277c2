from pydantic import BaseModel


class Token(BaseModel):
    success: bool = True
    token: str
