"""
Renderer HTML — Document → nœuds HTML, un par bloc, dans l'ordre.

Dispatch sur `type`. Un type inconnu du registry (ou sans template)
produit un seul nœud d'erreur visible au lieu de faire échouer la page.
Le contenu des TextBlock est injecté tel quel : il est nettoyé à
l'enregistrement (voir sanitize.py).
"""
import logging
import re
from html import escape
from typing import Callable, Dict, Iterator

from ..blocks import AnyComponent, Document, HeroSection, TextBlock, Spacer
from ..registry import ComponentRegistry, DEFAULT_REGISTRY
from .css import generate_page_css

log = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_CSS_CLASS = re.compile(r"^[A-Za-z0-9_\-: /\[\]#.]+$")

# 1 unité de l'échelle d'espacement = 0.25rem (h-16 → 4rem)
SPACING_UNIT_REM = 0.25


# ── Templates par bloc ──────────────────────────────────────────────────────

def render_hero(b: HeroSection) -> str:
    classes = ["hero"]
    style   = ""
    color   = b.bg_color.strip()
    if _HEX_COLOR.match(color):
        style = f' style="background-color:{color}"'
    elif color and _CSS_CLASS.match(color):
        classes.append(escape(color))

    return f"""<section class="{" ".join(classes)}"{style}>
  <h1 class="hero__title">{escape(b.title)}</h1>
  <p class="hero__description">{escape(b.description)}</p>
</section>"""


def render_text(b: TextBlock) -> str:
    return f"""<div class="text-block">
  <div class="prose">{b.content}</div>
</div>"""


def render_spacer(b: Spacer) -> str:
    height = b.height * SPACING_UNIT_REM
    return f'<div class="spacer" style="height:{height:g}rem" aria-hidden="true"></div>'


def render_error(component_type: str) -> str:
    return (
        f'<div class="block-error" data-type="{escape(component_type)}">'
        f"Error: Unknown component type.</div>"
    )


_TEMPLATES: Dict[str, Callable] = {
    "HeroSection": render_hero,
    "TextBlock":   render_text,
    "Spacer":      render_spacer,
}


def render_component(component: AnyComponent, registry: ComponentRegistry = DEFAULT_REGISTRY) -> str:
    template = _TEMPLATES.get(component.type)
    if template is None or not registry.is_registered(component.type) \
            or not isinstance(component, registry.model_for(component.type)):
        log.warning("Bloc non rendu : type %r inconnu", component.type)
        return render_error(component.type)
    return template(component)


def render(document: Document, registry: ComponentRegistry = DEFAULT_REGISTRY) -> Iterator[str]:
    """Génère un nœud HTML par bloc (paresseux ; ré-itérable en rappelant render)."""
    for component in document.components:
        yield render_component(component, registry)


# ── Pages complètes ─────────────────────────────────────────────────────────

def _html_shell(title: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{escape(title)}</title>
  <style>{generate_page_css()}</style>
</head>
<body>
{body}
</body>
</html>"""


def render_page(title: str, document: Document, registry: ComponentRegistry = DEFAULT_REGISTRY) -> str:
    """HTML complet d'une page visiteur."""
    nodes = "\n".join(render(document, registry))
    return _html_shell(f"{title} - NFC Content", f'<main class="page">\n{nodes}\n</main>')


def render_not_assigned(label: str) -> str:
    """Page « contenu non assigné » (tag sans page ou contenu illisible)."""
    return _html_shell("Content Not Assigned", f"""<div class="notice">
  <h1 class="notice__title">Content Not Assigned</h1>
  <p class="notice__text">The tag <strong>{escape(label)}</strong> has not yet been linked to a content page.</p>
  <p class="notice__hint">Please contact the CMS administrator.</p>
</div>""")


def render_not_found(label: str) -> str:
    return _html_shell("Tag Not Found", f"""<div class="notice">
  <h1 class="notice__title">Tag Not Found</h1>
  <p class="notice__text">No NFC tag matches <strong>{escape(label)}</strong>.</p>
</div>""")
