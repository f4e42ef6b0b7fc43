# preconsult/__init__.py
