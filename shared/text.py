"""Text helpers shared by slugs and search."""

import re

from django.utils.text import slugify  # type: ignore

_TURKISH_ASCII = str.maketrans({
    'ç': 'c', 'Ç': 'c',
    'ğ': 'g', 'Ğ': 'g',
    'ı': 'i', 'I': 'i', 'İ': 'i',
    'ö': 'o', 'Ö': 'o',
    'ş': 's', 'Ş': 's',
    'ü': 'u', 'Ü': 'u',
})


def turkish_lower(text: str) -> str:
    """Lowercase with the dotted/dotless i rules of Turkish."""
    return (text or '').replace('I', 'ı').replace('İ', 'i').lower()


def turkish_slugify(text: str) -> str:
    """``"Meram Yeni Mahalle"`` -> ``"meram-yeni-mahalle"``; ç, ğ, ı, ö, ş, ü folded to ASCII."""
    folded = (text or '').translate(_TURKISH_ASCII)
    return re.sub(r'-{2,}', '-', slugify(folded)).strip('-')
