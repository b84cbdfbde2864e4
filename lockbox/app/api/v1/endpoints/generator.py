# lockbox/app/api/v1/endpoints/generator.py
"""
Password generation. Not authenticated: nothing is read or stored.
"""
from fastapi import APIRouter

from lockbox.app.core.exceptions import ValidationError
from lockbox.app.schemas.generator import GeneratePasswordRequest, GeneratePasswordResponse
from lockbox.app.security.password_generator import MAX_LENGTH, MIN_LENGTH, generate_password

router = APIRouter()


def _default(value, fallback: bool) -> bool:
    return fallback if value is None else value


@router.post("/generate-password", response_model=GeneratePasswordResponse)
async def generate(request: GeneratePasswordRequest):
    length = request.length
    if not length or length < MIN_LENGTH or length > MAX_LENGTH:
        raise ValidationError(
            f"Length must be between {MIN_LENGTH} and {MAX_LENGTH} characters"
        )

    password = generate_password(
        length,
        include_letters=_default(request.includeLetters, True),
        include_numbers=_default(request.includeNumbers, True),
        include_symbols=_default(request.includeSymbols, False),
        exclude_look_alikes=_default(request.excludeLookAlikes, True),
    )
    return {"password": password}
