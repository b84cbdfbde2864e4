# lockbox/app/schemas/token.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class TokenPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    sub: Optional[str] = None
    # Older tokens carry the owner id as "userId" instead of "sub"
    user_id: Optional[str] = Field(default=None, alias="userId")
    email: Optional[str] = None

    @property
    def owner_id(self) -> Optional[str]:
        return self.sub or self.user_id
