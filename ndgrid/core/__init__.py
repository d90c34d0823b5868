"""
Core value algebra, numeric capabilities, contracts and settings.

Строительные блоки, не владеющие буфером: скалярные типы, векторы,
формы, интервалы, JSON-контракты и настройки.
"""
