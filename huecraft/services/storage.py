"""
Huecraft Palette Store
Persists favorite palettes and the interaction log behind a pluggable backend.
"""
import json
import os
import shutil
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from huecraft.config import Config
from huecraft.errors import StorageError
from huecraft.schemas import FavoritePalette, Interaction, InteractionType, Palette
from huecraft.services.colors import __version__
from huecraft.utils.ids import generate_interaction_id
from huecraft.utils.logging import get_logger


def _empty_database() -> Dict[str, Any]:
    return {
        "favorites": [],
        "interactions": [],
        "metadata": {"version": __version__, "last_modified": None},
    }


class StorageBackend(ABC):
    """Abstract base class for store backends."""

    @abstractmethod
    def load(self) -> Optional[Dict[str, Any]]:
        """Return the stored database, or None if nothing was stored yet."""
        pass

    @abstractmethod
    def save(self, data: Dict[str, Any]) -> None:
        """Replace the stored database."""
        pass


class InMemoryBackend(StorageBackend):
    """Process-local backend, mainly for tests and ephemeral sessions."""

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self._data = json.loads(json.dumps(data)) if data is not None else None

    def load(self) -> Optional[Dict[str, Any]]:
        if self._data is None:
            return None
        return json.loads(json.dumps(self._data))

    def save(self, data: Dict[str, Any]) -> None:
        self._data = json.loads(json.dumps(data))


class JSONFileBackend(StorageBackend):
    """JSON file backend; the previous file is copied aside before each write."""

    def __init__(self, path: Optional[str] = None):
        self.path = path or Config.store_path()
        root, ext = os.path.splitext(self.path)
        self.backup_path = f"{root}.backup{ext or '.json'}"

    def load(self) -> Optional[Dict[str, Any]]:
        if not os.path.exists(self.path):
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            get_logger().error(f"Failed to read palette store: {e}", extra={"path": self.path})
            raise StorageError(f"Failed to read palette store at {self.path}: {e}") from e

    def save(self, data: Dict[str, Any]) -> None:
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            if os.path.exists(self.path):
                shutil.copyfile(self.path, self.backup_path)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            get_logger().error(f"Failed to write palette store: {e}", extra={"path": self.path})
            raise StorageError(f"Failed to write palette store at {self.path}: {e}") from e


class PaletteStore:
    """
    Favorites and interaction log.

    Every mutation is written through to the backend immediately. The
    interaction log keeps only the newest `max_interactions` entries.
    """

    def __init__(
        self,
        backend: Optional[StorageBackend] = None,
        max_interactions: int = Config.MAX_INTERACTIONS
    ):
        self.backend = backend or JSONFileBackend()
        self.max_interactions = max_interactions
        self._favorites: List[FavoritePalette] = []
        self._interactions: List[Interaction] = []
        self._load()

    def _load(self):
        data = self.backend.load()
        if data is None:
            self._persist()
            return

        try:
            self._favorites = [FavoritePalette.model_validate(f) for f in data.get("favorites", [])]
            self._interactions = [Interaction.model_validate(i) for i in data.get("interactions", [])]
        except ValidationError as e:
            get_logger().error("Palette store contains invalid records", extra={"errors": e.error_count()})
            raise StorageError(f"Palette store contains invalid records: {e}") from e

    def _snapshot(self) -> Dict[str, Any]:
        data = _empty_database()
        data["favorites"] = [f.model_dump(mode="json") for f in self._favorites]
        data["interactions"] = [i.model_dump(mode="json") for i in self._interactions]
        data["metadata"]["last_modified"] = datetime.now(timezone.utc).isoformat()
        return data

    def _persist(self):
        self.backend.save(self._snapshot())

    # ------------------------------------------------------------------
    # Favorites
    # ------------------------------------------------------------------

    def save_favorite(
        self,
        palette: Palette,
        name: str,
        tags: Optional[List[str]] = None
    ) -> FavoritePalette:
        """Save a palette as a favorite with a usage count of 1."""
        favorite = FavoritePalette.model_validate({
            **palette.model_dump(),
            "name": name,
            "tags": list(tags or []),
        })
        self._favorites.append(favorite)
        self._persist()

        get_logger().info("Favorite saved", extra={"palette_id": favorite.id, "name": name})
        return favorite

    def list_favorites(self, limit: Optional[int] = None, offset: int = 0) -> List[FavoritePalette]:
        """Favorites ordered by last use (or save time), newest first."""
        favorites = sorted(
            self._favorites,
            key=lambda fav: fav.last_used or fav.saved_at,
            reverse=True,
        )
        if offset > 0:
            favorites = favorites[offset:]
        if limit is not None:
            favorites = favorites[:limit]
        return favorites

    def search_favorites(self, query: str) -> List[FavoritePalette]:
        """Case-insensitive substring search over name, tags, hex codes and prompt."""
        needle = query.lower()

        def matches(fav: FavoritePalette) -> bool:
            if needle in fav.name.lower():
                return True
            if any(needle in tag.lower() for tag in fav.tags):
                return True
            if any(needle in color.hex.lower() for color in fav.colors):
                return True
            prompt = fav.metadata.original_prompt
            return bool(prompt and needle in prompt.lower())

        return [fav for fav in self._favorites if matches(fav)]

    def get_favorite(self, palette_id: str) -> Optional[FavoritePalette]:
        return next((fav for fav in self._favorites if fav.id == palette_id), None)

    def get_favorite_by_name(self, name: str) -> Optional[FavoritePalette]:
        lowered = name.lower()
        return next((fav for fav in self._favorites if fav.name.lower() == lowered), None)

    def delete_favorite(self, palette_id: str) -> bool:
        """Delete a favorite; returns False if the id is unknown."""
        for index, fav in enumerate(self._favorites):
            if fav.id == palette_id:
                del self._favorites[index]
                self._persist()
                return True
        return False

    def increment_usage(self, palette_id: str) -> Optional[FavoritePalette]:
        """Bump usage count and last-used time; unknown ids are ignored."""
        for index, fav in enumerate(self._favorites):
            if fav.id == palette_id:
                updated = fav.model_copy(update={
                    "usage_count": fav.usage_count + 1,
                    "last_used": datetime.now(timezone.utc),
                })
                self._favorites[index] = updated
                self._persist()
                return updated
        return None

    def get_favorites_by_tag(self, tag: str) -> List[FavoritePalette]:
        lowered = tag.lower()
        return [fav for fav in self._favorites if any(t.lower() == lowered for t in fav.tags)]

    def count(self) -> int:
        return len(self._favorites)

    def clear_all(self) -> int:
        """Delete every favorite and return how many were removed."""
        removed = len(self._favorites)
        self._favorites = []
        self._persist()
        get_logger().warning("All favorites cleared", extra={"removed": removed})
        return removed

    def export_all(self) -> Dict[str, Any]:
        """Whole database as a JSON-ready dict: favorites, interactions, metadata."""
        return self._snapshot()

    def import_favorites(self, data: Dict[str, Any], overwrite: bool = False) -> int:
        """
        Merge favorites from an exported database.

        Every record is validated before anything is merged. Favorites whose
        id already exists are skipped, or replaced in place with `overwrite`.

        Returns:
            Number of favorites added or replaced

        Raises:
            StorageError: If any favorite record is invalid
        """
        try:
            incoming = [FavoritePalette.model_validate(f) for f in data.get("favorites", [])]
        except ValidationError as e:
            raise StorageError(f"Import contains invalid favorites: {e}") from e

        positions = {fav.id: index for index, fav in enumerate(self._favorites)}
        merged = 0
        for favorite in incoming:
            if favorite.id in positions:
                if not overwrite:
                    continue
                self._favorites[positions[favorite.id]] = favorite
            else:
                positions[favorite.id] = len(self._favorites)
                self._favorites.append(favorite)
            merged += 1

        self._persist()
        get_logger().info("Favorites imported", extra={
            "merged": merged,
            "skipped": len(incoming) - merged,
        })
        return merged

    # ------------------------------------------------------------------
    # Interactions
    # ------------------------------------------------------------------

    def track_interaction(
        self,
        interaction_type: InteractionType,
        palette: Palette,
        metadata: Optional[Dict[str, Any]] = None
    ) -> Interaction:
        """Record an interaction against a palette, evicting the oldest past the cap."""
        interaction = Interaction(
            id=generate_interaction_id(),
            type=InteractionType(interaction_type),
            palette_id=palette.id,
            colors=list(palette.colors),
            scheme=palette.scheme,
            metadata=dict(metadata or {}),
        )
        self._interactions.append(interaction)

        overflow = len(self._interactions) - self.max_interactions
        if overflow > 0:
            self._interactions = self._interactions[overflow:]
            get_logger().debug(f"Evicted {overflow} oldest interactions", extra={
                "max_interactions": self.max_interactions,
            })

        self._persist()
        return interaction

    def get_interactions(self, limit: Optional[int] = None) -> List[Interaction]:
        """The last `limit` interactions in insertion order, or all of them."""
        if limit and limit > 0:
            return self._interactions[-limit:]
        return list(self._interactions)

    def get_interactions_by_type(
        self,
        interaction_type: InteractionType,
        limit: Optional[int] = None
    ) -> List[Interaction]:
        filtered = [i for i in self._interactions if i.type == interaction_type]
        if limit and limit > 0:
            return filtered[-limit:]
        return filtered

    def clear_interactions(self) -> int:
        """Delete the interaction log and return how many entries were removed."""
        removed = len(self._interactions)
        self._interactions = []
        self._persist()
        return removed
