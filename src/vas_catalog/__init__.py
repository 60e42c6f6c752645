# 🏪 vas_catalog/__init__.py
"""
🏪 vas_catalog — синхронізація каталогів VAS-провайдерів і генерація меню.

🔹 Провайдери → підписаний HTTP-фетч → адаптери → кеш за провайдером → ранжоване меню → пошук.
"""

__version__ = "1.0.0"
