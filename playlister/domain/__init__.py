"""Store-agnostic domain helpers."""
