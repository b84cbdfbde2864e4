# lockbox/app/api/v1/endpoints/vault.py
from typing import List, Optional

from fastapi import APIRouter, Depends, status

from lockbox.app.api import deps
from lockbox.app.schemas.vault import MessageResponse, VaultItemIn, VaultItemResponse
from lockbox.app.security.auth_gate import AuthenticatedIdentity
from lockbox.app.services.vault_store import VaultStore

router = APIRouter()

# The identity dependency is declared before the store in every handler so
# an auth failure is raised before a database session is touched.


@router.get("/vault", response_model=List[VaultItemResponse])
async def read_vault_items(
        search: Optional[str] = None,
        identity: AuthenticatedIdentity = Depends(deps.get_current_identity),
        store: VaultStore = Depends(deps.get_vault_store),
):
    return await store.list_items(identity.owner_id, search=search)


@router.get("/vault/{item_id}", response_model=VaultItemResponse)
async def read_vault_item(
        item_id: str,
        identity: AuthenticatedIdentity = Depends(deps.get_current_identity),
        store: VaultStore = Depends(deps.get_vault_store),
):
    return await store.get_item(identity.owner_id, item_id)


@router.post("/vault", response_model=VaultItemResponse, status_code=status.HTTP_201_CREATED)
async def create_vault_item(
        item_in: VaultItemIn,
        identity: AuthenticatedIdentity = Depends(deps.get_current_identity),
        store: VaultStore = Depends(deps.get_vault_store),
):
    return await store.create_item(identity.owner_id, item_in)


@router.put("/vault/{item_id}", response_model=VaultItemResponse)
async def update_vault_item(
        item_id: str,
        item_in: VaultItemIn,
        identity: AuthenticatedIdentity = Depends(deps.get_current_identity),
        store: VaultStore = Depends(deps.get_vault_store),
):
    return await store.update_item(identity.owner_id, item_id, item_in)


@router.delete("/vault/{item_id}", response_model=MessageResponse)
async def delete_vault_item(
        item_id: str,
        identity: AuthenticatedIdentity = Depends(deps.get_current_identity),
        store: VaultStore = Depends(deps.get_vault_store),
):
    await store.delete_item(identity.owner_id, item_id)
    return {"message": "Vault item deleted successfully"}
