"""Per-card favorite/watch state.

One ``InteractionState`` belongs to exactly one rendered card. Two cards
showing the same movie id never share an instance, so toggling one leaves
the other untouched. Nothing here is persisted or sent to the backend.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class InteractionState:
    movie_id: int | str
    is_favorite: bool = False
    is_watching: bool = False

    def toggle_favorite(self) -> bool:
        self.is_favorite = not self.is_favorite
        return self.is_favorite

    def start_watching(self) -> bool:
        # One-directional: there is no stop_watching. Playback itself is
        # out of scope, so nothing ever moves the flag back to False.
        self.is_watching = True
        return self.is_watching

    @property
    def favorite_label(self) -> str:
        return "Favorited" if self.is_favorite else "Add to Favorites"
