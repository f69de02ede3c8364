"""
Пакет хранилища.

Содержит модели документа (UserArchive -> Channel -> Post) и класс Database,
отвечающий за чтение и атомарную перезапись data.json пользователя.
"""
