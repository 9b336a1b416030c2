"""Tests für PromptDraft (Dirty-Tracking der Stil-Bearbeitung)."""

import pytest

from context.editor import PromptDraft
from context.errors import NotBuiltinError
from context.prompts import get_factory_prompt


class TestPromptDraft:
    def test_open_is_clean(self, style_store):
        draft = PromptDraft.open(style_store, "chat")
        assert not draft.is_dirty
        assert not draft.can_save
        assert draft.name == get_factory_prompt("chat").name

    def test_edit_marks_dirty(self, style_store):
        draft = PromptDraft.open(style_store, "chat")
        draft.description = "Kurz"
        assert draft.changed_fields() == {"description": "Kurz"}
        assert draft.can_save

    def test_reverting_edit_is_clean_again(self, style_store):
        """Vergleich gegen den geladenen Stand, nicht gegen ein Flag."""
        draft = PromptDraft.open(style_store, "chat")
        original = draft.name
        draft.name = "Other"
        draft.name = original
        assert not draft.is_dirty

    def test_empty_name_blocks_save(self, style_store):
        draft = PromptDraft.open(style_store, "chat")
        draft.name = "   "
        assert draft.is_dirty
        assert not draft.can_save
        assert draft.save() is False

    def test_empty_prompt_blocks_save(self, style_store):
        draft = PromptDraft.open(style_store, "chat")
        draft.prompt = ""
        assert not draft.can_save

    def test_save_writes_only_changed_fields(self, style_store):
        draft = PromptDraft.open(style_store, "notes")
        draft.name = "Meeting Notes"
        assert draft.save() is True
        stored = style_store.get("notes")
        assert stored.name == "Meeting Notes"
        assert stored.prompt == get_factory_prompt("notes").prompt
        assert not draft.is_dirty

    def test_reset_reloads_factory_values(self, style_store):
        draft = PromptDraft.open(style_store, "code")
        draft.name = "Mine"
        draft.save()
        draft.reset()
        assert draft.name == get_factory_prompt("code").name
        assert not draft.is_dirty

    def test_reset_custom_fails(self, style_store):
        style_store.add("legal", "Legal", "", "Legal: ${output}")
        draft = PromptDraft.open(style_store, "legal")
        with pytest.raises(NotBuiltinError):
            draft.reset()
