from __future__ import annotations
import math

from config import settings
from utils.errors import ValidationError


def clamp_page_size(page_size: int) -> int:
    """v2 list endpoints silently cap oversized pages instead of rejecting them."""
    return min(page_size, settings.MAX_PAGE_SIZE)


def validate_page(page_number: int, page_size: int) -> None:
    if page_number < 1:
        raise ValidationError("Número da página deve ser maior que zero")
    if page_size < 1 or page_size > settings.MAX_PAGE_SIZE:
        raise ValidationError(f"Tamanho da página deve ser entre 1 e {settings.MAX_PAGE_SIZE}")


def total_pages(total_count: int, page_size: int) -> int:
    return math.ceil(total_count / page_size)
