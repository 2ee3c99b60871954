"""
MCP stdio-сервер: переиспользует сервисы FastAPI-приложения, не дублирует их.
Запускается отдельным процессом (не внутри FastAPI lifespan) для LLM/агентов.
"""
import logging
import signal
import sys
from typing import Any, Dict, List, Optional

import anyio
from anyio import CancelScope

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, Tool

from store_api import db
from store_api.config import LOG_LEVEL, MCP_SERVER_NAME, MCP_SERVER_VERSION
from store_api.logging_config import setup_logging
from store_api.mcp.tools import TOOLS, ToolDispatcher
from store_api.repositories.products import ProductRepository
from store_api.repositories.users import UserRepository
from store_api.services.products import ProductService
from store_api.services.users import UserService

logger = logging.getLogger(__name__)


def _create_server(dispatcher: ToolDispatcher) -> Server:
    """Создаёт MCP-сервер с каталогом из десяти CRUD-инструментов."""
    server = Server(
        name=MCP_SERVER_NAME,
        version=MCP_SERVER_VERSION,
    )

    @server.list_tools()
    async def list_tools(_request=None) -> List[Tool]:
        return TOOLS

    # Аргументы проверяют DTO в диспетчере, как и тела REST-запросов
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: Optional[Dict[str, Any]]) -> CallToolResult:
        """Все ошибки уже упакованы диспетчером в результат с isError."""
        return await dispatcher.call(name, arguments)

    return server


def build_dispatcher(database) -> ToolDispatcher:
    return ToolDispatcher(
        users=UserService(UserRepository(database)),
        products=ProductService(ProductRepository(database)),
    )


async def _cancel_on_signal(scope: CancelScope) -> None:
    """SIGINT/SIGTERM останавливают сессию, чтобы соединение с БД закрылось штатно."""
    with anyio.open_signal_receiver(signal.SIGINT, signal.SIGTERM) as signals:
        async for signum in signals:
            logger.info("Received signal %s, shutting down", signal.Signals(signum).name)
            scope.cancel()
            return


async def _run_stdio() -> None:
    """Запуск сервера поверх stdio (stdin/stdout)."""
    database = await db.connect()
    try:
        await db.ensure_indexes(database)
        server = _create_server(build_dispatcher(database))
        init_options = server.create_initialization_options()

        async with anyio.create_task_group() as tg:
            tg.start_soon(_cancel_on_signal, tg.cancel_scope)
            async with stdio_server() as (read_stream, write_stream):
                logger.info("MCP server %s started", MCP_SERVER_NAME)
                await server.run(read_stream, write_stream, init_options)
            tg.cancel_scope.cancel()
    finally:
        with anyio.CancelScope(shield=True):
            await db.close()


def run_server() -> None:
    """Точка входа: запуск MCP-сервера (для subprocess)."""
    setup_logging(LOG_LEVEL, stream=sys.stderr)
    anyio.run(_run_stdio, backend="asyncio")


if __name__ == "__main__":
    run_server()
