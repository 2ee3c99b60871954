"""
MCP-слой проекта: stdio-сервер с CRUD-инструментами и клиент для проверки.
Не встроен в FastAPI lifespan, работает как отдельный процесс для LLM/агентов.
"""
from store_api.mcp.server import run_server

__all__ = ["run_server"]
