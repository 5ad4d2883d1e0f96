"""Screen registry: in-process owner of every operator session's screen states."""

import logging

from catalog_admin.domain.entities import Collection, ScreenState

logger = logging.getLogger(__name__)


class ScreenRegistry:
    """Hands out one independent ScreenState per (session, collection).

    States are never shared: two sessions viewing the same collection, or one
    session viewing two collections, each get their own list cache and form.
    """

    def __init__(self) -> None:
        self._screens: dict[tuple[str, Collection], ScreenState] = {}

    def get(self, session_id: str, collection: Collection) -> ScreenState:
        key = (session_id, collection)
        state = self._screens.get(key)
        if state is None:
            state = ScreenState(collection=collection.value)
            self._screens[key] = state
            logger.debug("Opened %s screen for session %s", collection.value, session_id)
        return state

    def discard_session(self, session_id: str) -> int:
        """Forget every screen of a session. Returns how many were dropped."""
        keys = [key for key in self._screens if key[0] == session_id]
        for key in keys:
            del self._screens[key]
        logger.debug("Closed %d screens for session %s", len(keys), session_id)
        return len(keys)
