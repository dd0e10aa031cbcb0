"""Overwrite confirmation for existing entries."""

import logging

from mb_pass.insert.ports import EntryStore, Prompter

logger = logging.getLogger(__name__)


class OverwriteGuard:
    """Decides whether an existing entry may be replaced."""

    def __init__(self, store: EntryStore, prompter: Prompter) -> None:
        self._store = store
        self._prompter = prompter

    def should_proceed(self, name: str, *, forced: bool) -> bool:
        """Return True if forced or the entry is new; otherwise ask the user."""
        if forced or not self._store.exists(name):
            return True
        answer = self._prompter.ask_confirmation(f"An entry already exists for {name}. Overwrite it?")
        if not answer:
            logger.info("Overwrite of '%s' declined", name)
        return answer
