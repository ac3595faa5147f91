"""NFC Pages — CMS de pages par blocs liées à des tags NFC."""

__version__ = "1.0.0"
