# preconsult/api/__init__.py
