# ⚙️ vas_catalog/config/setup/__init__.py
