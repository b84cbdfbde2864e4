# lockbox/app/models/vault_item.py
from sqlalchemy import Column, String, Text, DateTime

from lockbox.app.db.base import Base


class VaultItem(Base):
    __tablename__ = "vault_items"

    # --- PLAIN METADATA (server may read these) ---
    # Opaque UUID4, assigned by the vault store
    id = Column(String(36), primary_key=True)

    # Sole authorization scope: every query filters on it
    owner_id = Column(String(255), nullable=False, index=True)

    # --- CIPHERTEXT (CipherService output, never plaintext) ---
    title = Column(Text, nullable=False)
    username = Column(Text, nullable=False)
    password = Column(Text, nullable=False)

    # Empty string when the field was not supplied
    url = Column(Text, nullable=False, default="")
    notes = Column(Text, nullable=False, default="")

    # Set by the vault store so the values can be echoed without a re-read
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False)
