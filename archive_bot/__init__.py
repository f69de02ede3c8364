"""
ArchiveGram: Telegram-бот, сохраняющий пересланные посты в альбомы
и собирающий из них статические HTML-галереи.
"""
