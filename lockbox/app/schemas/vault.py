# lockbox/app/schemas/vault.py
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional


class VaultItemIn(BaseModel):
    """
    Body of create and update requests. Update is whole-record, so both use
    the same shape. Required fields are checked by the vault store so the
    error message names the constraint.
    """
    title: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    url: Optional[str] = None
    notes: Optional[str] = None


class VaultItemResponse(BaseModel):
    """Decrypted item as returned to the owner."""
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: str
    title: str
    username: str
    password: str
    url: str = ""
    notes: str = ""
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")


class MessageResponse(BaseModel):
    message: str
