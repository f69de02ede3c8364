from aiogram import Router

from . import (
    start,
    albums,
    consolidate,
    generate,
    archive,
)


def get_router():
    routers = [
        start.get_router(),
        albums.get_router(),
        consolidate.get_router(),
        generate.get_router(),
        # Прием сообщений последним: ловит все, что не команда
        archive.get_router(),
    ]

    router = Router(name="User")
    router.include_routers(*routers)

    return router
