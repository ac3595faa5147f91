"""Tests éditeur — append / update_at / remove_at / move_to, atomicité."""
import json

import pytest

from nfc_pages.page_builder import (
    BlockEditor, Document, DocumentDecodeError, FieldMismatch, HeroSection, IndexOutOfRange,
    Spacer, TextBlock, UnknownComponent, UnknownComponentType,
)


def _types(editor):
    return [c.type for c in editor]


@pytest.fixture
def three():
    editor = BlockEditor()
    editor.append("HeroSection")
    editor.append("TextBlock")
    editor.append("Spacer")
    return editor


# ── append ────────────────────────────────────────────────────────────────────

def test_append_uses_defaults():
    editor = BlockEditor()
    block = editor.append("Spacer")
    assert block == Spacer(height=16)
    assert len(editor) == 1


def test_append_unknown_type():
    editor = BlockEditor()
    with pytest.raises(UnknownComponentType):
        editor.append("Carousel")
    assert len(editor) == 0


def test_append_then_move_swaps():
    editor = BlockEditor()
    editor.append("HeroSection")
    editor.append("TextBlock")
    editor.move_to(0, 1)
    assert _types(editor) == ["TextBlock", "HeroSection"]


# ── update_at ─────────────────────────────────────────────────────────────────

def test_update_merges_partial_fields(three):
    block = three.update_at(0, {"title": "Welcome"})
    assert block.title == "Welcome"
    assert block.description == "Enter a compelling description."
    assert three.components[0] == block


def test_update_accepts_wire_and_python_names(three):
    three.update_at(0, {"bgColor": "bg-blue-100"})
    assert three.components[0].bg_color == "bg-blue-100"
    three.update_at(0, {"bg_color": "#000000"})
    assert three.components[0].bg_color == "#000000"


def test_update_foreign_field_leaves_document_unchanged(three):
    before = three.document
    with pytest.raises(FieldMismatch) as exc:
        three.update_at(1, {"height": 4})
    assert exc.value.fields == ["height"]
    assert three.document == before


def test_update_cannot_change_type(three):
    with pytest.raises(FieldMismatch):
        three.update_at(2, {"type": "TextBlock"})
    assert isinstance(three.components[2], Spacer)


def test_update_invalid_value(three):
    before = three.document
    with pytest.raises(FieldMismatch):
        three.update_at(2, {"height": -1})
    assert three.document == before


def test_update_out_of_range(three):
    with pytest.raises(IndexOutOfRange):
        three.update_at(3, {"title": "x"})
    with pytest.raises(IndexOutOfRange):
        three.update_at(-1, {"title": "x"})


def test_update_text_is_sanitized(three):
    block = three.update_at(1, {"content": '<p onclick="x()">Hi<script>alert(1)</script></p>'})
    assert block.content == "<p>Hi</p>"


# ── remove_at ─────────────────────────────────────────────────────────────────

def test_remove_middle_keeps_order(three):
    removed = three.remove_at(1)
    assert isinstance(removed, TextBlock)
    assert _types(three) == ["HeroSection", "Spacer"]
    assert three.components[1].type == "Spacer"


def test_remove_out_of_range(three):
    with pytest.raises(IndexOutOfRange):
        three.remove_at(5)
    assert len(three) == 3


# ── move_to ───────────────────────────────────────────────────────────────────

def test_move_last_to_first(three):
    three.move_to(2, 0)
    assert _types(three) == ["Spacer", "HeroSection", "TextBlock"]


def test_move_first_to_last(three):
    three.move_to(0, 2)
    assert _types(three) == ["TextBlock", "Spacer", "HeroSection"]


def test_move_same_position_is_noop(three):
    before = three.document
    three.move_to(1, 1)
    assert three.document == before


def test_move_invalid_target_does_not_mutate(three):
    before = three.document
    with pytest.raises(IndexOutOfRange):
        three.move_to(0, 3)
    assert three.document == before


# ── chargement / encodage ─────────────────────────────────────────────────────

def test_from_text_and_encode():
    text = json.dumps({"components": [{"type": "TextBlock", "content": "<p>a</p>"}]})
    editor = BlockEditor.from_text(text)
    editor.append("Spacer")
    data = json.loads(editor.encode())
    assert [c["type"] for c in data["components"]] == ["TextBlock", "Spacer"]


def test_from_text_invalid():
    with pytest.raises(DocumentDecodeError):
        BlockEditor.from_text('{"components": "nope"}')


def test_editor_refuses_unknown_components():
    doc = Document(components=[UnknownComponent(type="Carousel")])
    with pytest.raises(UnknownComponentType):
        BlockEditor(doc)


def test_document_snapshot_is_independent(three):
    snapshot = three.document
    three.remove_at(0)
    assert len(snapshot) == 3
    assert isinstance(snapshot.components[0], HeroSection)
