"""In-memory character roster."""

import threading

from roster.schemas.character import Character, CharacterCreate, CharacterUpdate


class CharacterNotFoundError(LookupError):
    """Raised when no character has the requested id."""

    def __init__(self, character_id: int) -> None:
        self.character_id = character_id
        super().__init__(f"Character {character_id} not found")


class CharacterStore:
    """Characters keyed by id; ids are assigned in increasing order and never reused."""

    def __init__(self) -> None:
        self._characters: dict[int, Character] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def list_all(self) -> list[Character]:
        with self._lock:
            return list(self._characters.values())

    def get(self, character_id: int) -> Character:
        with self._lock:
            character = self._characters.get(character_id)
        if character is None:
            raise CharacterNotFoundError(character_id)
        return character

    def add(self, data: CharacterCreate) -> Character:
        with self._lock:
            character = Character(id=self._next_id, name=data.name, last_name=data.last_name)
            self._next_id += 1
            self._characters[character.id] = character
            return character

    def update(self, character_id: int, data: CharacterUpdate) -> Character:
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        with self._lock:
            current = self._characters.get(character_id)
            if current is None:
                raise CharacterNotFoundError(character_id)
            updated = current.model_copy(update=changes)
            self._characters[character_id] = updated
            return updated

    def delete(self, character_id: int) -> None:
        with self._lock:
            if self._characters.pop(character_id, None) is None:
                raise CharacterNotFoundError(character_id)
