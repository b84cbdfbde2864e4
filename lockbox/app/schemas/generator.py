# lockbox/app/schemas/generator.py
from pydantic import BaseModel
from typing import Optional


class GeneratePasswordRequest(BaseModel):
    # Bounds are checked in the endpoint so a missing length and an
    # out-of-range one give the same 400 message
    length: Optional[int] = None
    includeNumbers: Optional[bool] = None
    includeLetters: Optional[bool] = None
    includeSymbols: Optional[bool] = None
    excludeLookAlikes: Optional[bool] = None


class GeneratePasswordResponse(BaseModel):
    password: str
