"""Character roster endpoints. Reading needs any valid token; writes are role-restricted."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from roster.api.v1.auth import get_current_principal, require_roles
from roster.core.dependencies import get_character_store
from roster.schemas.auth import MessageResponse, Principal, Role
from roster.schemas.character import Character, CharacterCreate, CharacterUpdate
from roster.services.characters import CharacterNotFoundError, CharacterStore

router = APIRouter()


def _not_found(e: CharacterNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("", response_model=list[Character])
def list_characters(
    _principal: Annotated[Principal, Depends(get_current_principal)],
    store: Annotated[CharacterStore, Depends(get_character_store)],
) -> list[Character]:
    return store.list_all()


@router.get("/{character_id}", response_model=Character)
def get_character(
    character_id: int,
    _principal: Annotated[Principal, Depends(get_current_principal)],
    store: Annotated[CharacterStore, Depends(get_character_store)],
) -> Character:
    try:
        return store.get(character_id)
    except CharacterNotFoundError as e:
        raise _not_found(e) from e


@router.post("", response_model=Character, status_code=status.HTTP_201_CREATED)
def create_character(
    body: CharacterCreate,
    _principal: Annotated[Principal, Depends(require_roles(Role.ADMIN, Role.USER))],
    store: Annotated[CharacterStore, Depends(get_character_store)],
) -> Character:
    return store.add(body)


@router.patch("/{character_id}", response_model=Character)
def update_character(
    character_id: int,
    body: CharacterUpdate,
    _admin: Annotated[Principal, Depends(require_roles(Role.ADMIN))],
    store: Annotated[CharacterStore, Depends(get_character_store)],
) -> Character:
    """Change name and/or lastName of a character (admin only)."""
    try:
        return store.update(character_id, body)
    except CharacterNotFoundError as e:
        raise _not_found(e) from e


@router.delete("/{character_id}", response_model=MessageResponse)
def delete_character(
    character_id: int,
    _admin: Annotated[Principal, Depends(require_roles(Role.ADMIN))],
    store: Annotated[CharacterStore, Depends(get_character_store)],
) -> MessageResponse:
    """Remove a character (admin only)."""
    try:
        store.delete(character_id)
    except CharacterNotFoundError as e:
        raise _not_found(e) from e
    return MessageResponse(message="Character deleted successfully")
