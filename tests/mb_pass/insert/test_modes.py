"""Tests for the insert input mode decision table."""

import itertools

import pytest

from mb_pass.insert.modes import InputMode, select_mode


class TestSelectMode:
    """select_mode priority order."""

    @pytest.mark.parametrize(("piped", "multiline", "interactive"), list(itertools.product([False, True], repeat=3)))
    def test_key_always_wins(self, piped: bool, multiline: bool, interactive: bool):
        """A field key selects single-field regardless of everything else."""
        mode = select_mode(has_key=True, piped=piped, multiline=multiline, interactive=interactive)
        assert mode is InputMode.SINGLE_FIELD

    @pytest.mark.parametrize(("multiline", "interactive"), list(itertools.product([False, True], repeat=2)))
    def test_piped_document(self, multiline: bool, interactive: bool):
        """Piped data without a key is a full document."""
        mode = select_mode(has_key=False, piped=True, multiline=multiline, interactive=interactive)
        assert mode is InputMode.FULL_DOCUMENT

    def test_multiline_interactive(self):
        """Multiline on a terminal opens the editor."""
        assert select_mode(has_key=False, piped=False, multiline=True, interactive=True) is InputMode.MULTILINE_EDITOR

    def test_multiline_without_terminal(self):
        """Multiline is ignored without a terminal and falls through to the password prompt."""
        assert select_mode(has_key=False, piped=False, multiline=True, interactive=False) is InputMode.PROMPTED_PASSWORD

    @pytest.mark.parametrize("interactive", [False, True])
    def test_password_default(self, interactive: bool):
        """Without key, pipe or multiline the password is prompted."""
        assert select_mode(has_key=False, piped=False, multiline=False, interactive=interactive) is InputMode.PROMPTED_PASSWORD

    def test_every_combination_has_a_mode(self):
        """The table covers all sixteen inputs."""
        for combo in itertools.product([False, True], repeat=4):
            assert isinstance(select_mode(has_key=combo[0], piped=combo[1], multiline=combo[2], interactive=combo[3]), InputMode)


class TestGuardsOverwrite:
    """Which modes consult the overwrite guard."""

    def test_interactive_modes_guarded(self):
        """Editor and password modes replace the entry interactively."""
        assert InputMode.MULTILINE_EDITOR.guards_overwrite
        assert InputMode.PROMPTED_PASSWORD.guards_overwrite

    def test_stdin_and_field_modes_unguarded(self):
        """Piped documents and field updates never ask."""
        assert not InputMode.FULL_DOCUMENT.guards_overwrite
        assert not InputMode.SINGLE_FIELD.guards_overwrite
