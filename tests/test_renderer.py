"""Tests renderer — un nœud par bloc, isolation des types inconnus, pages complètes."""
import types

from nfc_pages.page_builder import (
    ComponentRegistry, Document, HeroSection, Spacer, TextBlock, UnknownComponent, decode,
    render, render_component, render_not_assigned, render_page,
)
from nfc_pages.page_builder.renderer.css import BACKGROUND_CLASSES, generate_page_css


def _doc(*components):
    return Document(components=components)


# ── Blocs ─────────────────────────────────────────────────────────────────────

def test_hero_hex_color_inline_style():
    html = render_component(HeroSection(title="Welcome", description="Hi", bg_color="#F0F4F8"))
    assert 'style="background-color:#F0F4F8"' in html
    assert "Welcome" in html
    assert "hero__description" in html


def test_hero_class_color():
    html = render_component(HeroSection(title="T", description="D", bg_color="bg-blue-100"))
    assert 'class="hero bg-blue-100"' in html
    assert "style=" not in html


def test_hero_escapes_plain_text():
    html = render_component(HeroSection(title="<b>x</b>", description="a & b", bg_color='" onload="x'))
    assert "&lt;b&gt;x&lt;/b&gt;" in html
    assert "a &amp; b" in html
    assert "onload" not in html


def test_text_block_injected_verbatim():
    html = render_component(TextBlock(content="<p><strong>Bold</strong></p>"))
    assert '<div class="prose"><p><strong>Bold</strong></p></div>' in html


def test_spacer_height_scale():
    html = render_component(Spacer(height=16))
    assert "height:4rem" in html


def test_unknown_type_error_node():
    html = render_component(UnknownComponent(type="Carousel"))
    assert "block-error" in html
    assert 'data-type="Carousel"' in html


def test_type_missing_from_registry_is_error_node():
    registry = ComponentRegistry([TextBlock])
    html = render_component(HeroSection(title="T", description="D", bg_color="#fff"), registry)
    assert "block-error" in html


# ── render(document) ──────────────────────────────────────────────────────────

def test_render_is_lazy_generator():
    nodes = render(_doc(Spacer(height=1)))
    assert isinstance(nodes, types.GeneratorType)


def test_render_one_node_per_component_in_order():
    doc = _doc(TextBlock(content="first"), Spacer(height=2), TextBlock(content="last"))
    nodes = list(render(doc))
    assert len(nodes) == 3
    assert "first" in nodes[0]
    assert "spacer" in nodes[1]
    assert "last" in nodes[2]


def test_render_isolates_unknown_component():
    doc = decode(
        '{"components": ['
        '{"type": "TextBlock", "content": "a"},'
        '{"type": "Carousel", "slides": []},'
        '{"type": "Spacer", "height": 2}]}'
    )
    nodes = list(render(doc))
    assert len(nodes) == 3
    errors = [i for i, n in enumerate(nodes) if "block-error" in n]
    assert errors == [1]


def test_render_restartable():
    doc = _doc(HeroSection(title="T", description="D", bg_color="#fff"), Spacer(height=3))
    assert list(render(doc)) == list(render(doc))


def test_render_empty_document():
    assert list(render(Document())) == []


# ── Pages complètes ───────────────────────────────────────────────────────────

def test_render_page_has_title_and_blocks():
    html = render_page("Menu", _doc(TextBlock(content="<p>Soup</p>")))
    assert "<!DOCTYPE html>" in html
    assert "<title>Menu - NFC Content</title>" in html
    assert "<p>Soup</p>" in html


def test_render_not_assigned_page():
    html = render_not_assigned("Table 4")
    assert "Content Not Assigned" in html
    assert "Table 4" in html


def test_hero_background_class_has_css_rule():
    html = render_page("Menu", _doc(HeroSection(title="T", description="D", bg_color="bg-blue-100")))
    assert 'class="hero bg-blue-100"' in html
    assert ".bg-blue-100{background-color:rgb(219, 234, 254)}" in html


def test_dark_background_class_lightens_hero_text():
    css = generate_page_css()
    assert ".hero.bg-gray-900 .hero__title" in css
    for name in BACKGROUND_CLASSES:
        assert f".{name}{{" in css
