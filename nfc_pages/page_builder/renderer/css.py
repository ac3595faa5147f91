"""
CSS des pages publiques — variables :root + styles des blocs.

Pas de compilation : une page NFC s'affiche sur mobile, la feuille est
petite et inline dans le <head>.
"""

_BLOCKS_CSS = """
*{box-sizing:border-box;margin:0;padding:0}
body{font-family:var(--font-family-body);color:var(--color-text);background:var(--color-bg);
  line-height:var(--line-height-base)}
.page{min-height:100vh;width:100%}
.hero{padding:48px;text-align:center;min-height:16rem;display:flex;flex-direction:column;
  align-items:center;justify-content:center}
.hero__title{font-size:var(--font-size-4xl);font-weight:800;margin-bottom:16px;color:#000}
.hero__description{font-size:var(--font-size-xl);color:var(--color-text-light)}
.text-block{padding:32px;max-width:56rem;margin:0 auto}
.prose p{margin-bottom:1em}
.prose h1,.prose h2,.prose h3{margin:1em 0 .5em;line-height:var(--line-height-tight)}
.prose ul,.prose ol{padding-left:1.5em;margin-bottom:1em}
.prose a{color:var(--color-primary)}
.spacer{width:100%}
.block-error{padding:16px;background:#fee2e2;color:#b91c1c}
.notice{min-height:100vh;display:flex;flex-direction:column;align-items:center;justify-content:center;
  background:var(--color-bg-gray);padding:32px;text-align:center}
.notice__title{font-size:var(--font-size-3xl);font-weight:700;margin-bottom:16px}
.notice__text{font-size:var(--font-size-lg);color:var(--color-text-light)}
.notice__hint{font-size:var(--font-size-sm);color:var(--color-text-light);margin-top:16px}
"""


# Classes de fond acceptées par HeroSection.bgColor (forme non hexadécimale)
BACKGROUND_CLASSES = {
    "bg-white":      "rgb(255, 255, 255)",
    "bg-gray-50":    "rgb(249, 250, 251)",
    "bg-gray-100":   "rgb(243, 244, 246)",
    "bg-gray-900":   "rgb(17, 24, 39)",
    "bg-blue-50":    "rgb(239, 246, 255)",
    "bg-blue-100":   "rgb(219, 234, 254)",
    "bg-blue-600":   "rgb(37, 99, 235)",
    "bg-green-100":  "rgb(220, 252, 231)",
    "bg-yellow-100": "rgb(254, 249, 195)",
    "bg-red-100":    "rgb(254, 226, 226)",
}

# Fonds sombres : texte du hero en clair
_DARK_BACKGROUNDS = ("bg-gray-900", "bg-blue-600")


def generate_background_css() -> str:
    rules = [f".{name}{{background-color:{color}}}" for name, color in BACKGROUND_CLASSES.items()]
    for name in _DARK_BACKGROUNDS:
        rules.append(f".hero.{name} .hero__title,.hero.{name} .hero__description{{color:#fff}}")
    return "\n".join(rules)


def generate_css_variables(primary: str = "rgb(37, 99, 235)") -> str:
    return f""":root {{
  --color-primary:    {primary};
  --color-text:       rgb(31, 41, 55);
  --color-text-light: rgb(107, 114, 128);
  --color-bg:         rgb(255, 255, 255);
  --color-bg-gray:    rgb(249, 250, 251);
  --font-family-body: 'Inter', 'Segoe UI', sans-serif;
  --font-size-sm:  14px; --font-size-lg: 18px; --font-size-xl: 20px;
  --font-size-3xl: 30px; --font-size-4xl: 36px;
  --line-height-tight: 1.25; --line-height-base: 1.6;
}}"""


def generate_page_css() -> str:
    return "\n".join([generate_css_variables(), _BLOCKS_CSS, generate_background_css()])
