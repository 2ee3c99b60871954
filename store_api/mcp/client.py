"""
MCP-клиент: запускает наш stdio MCP-сервер как subprocess, подключается по stdio
и либо выводит список инструментов, либо вызывает один из них.

Использование:
  python -m store_api.mcp.client                       # список инструментов
  python -m store_api.mcp.client <tool> [key=value...] # вызов инструмента

Примеры:
  python -m store_api.mcp.client get_all_products
  python -m store_api.mcp.client update_product id=6650f0... quantity=5
  python -m store_api.mcp.client create_product name=Milk description="Fresh milk" \\
      unitPrice=1.5 quantity=10 measureType=l 'attributes={"fat": "3.2%"}'
"""
import argparse
import asyncio
import json
import os
import sys
from typing import Any, Dict, List, Optional

# Официальный MCP SDK
from mcp import ClientSession, StdioServerParameters
from mcp.client.stdio import stdio_client


def _project_root() -> str:
    """Корень проекта (где лежит store_api/)."""
    path = os.path.abspath(__file__)
    # store_api/mcp/client.py -> store_api -> project root
    return os.path.dirname(os.path.dirname(os.path.dirname(path)))


def parse_arguments(pairs: List[str]) -> Dict[str, Any]:
    """
    Разбор аргументов вида key=value.

    Значение читается как JSON, если получается (числа, объекты, true/false),
    иначе остаётся строкой.
    """
    arguments: Dict[str, Any] = {}
    for pair in pairs:
        if "=" not in pair:
            raise ValueError(f"Argument must be key=value, got: {pair}")
        key, raw = pair.split("=", 1)
        try:
            arguments[key] = json.loads(raw)
        except json.JSONDecodeError:
            arguments[key] = raw
    return arguments


def _server_params() -> StdioServerParameters:
    env = os.environ.copy()
    env["PYTHONPATH"] = _project_root()
    return StdioServerParameters(
        command=sys.executable,
        args=["-m", "store_api.mcp.server"],
        env=env,
    )


async def list_tools(session: ClientSession) -> None:
    tools_result = await session.list_tools()
    if not tools_result or not hasattr(tools_result, "tools"):
        print("Нет инструментов или неверный ответ сервера.", file=sys.stderr)
        return

    print("MCP tools (name + description):\n")
    for tool in tools_result.tools:
        name = getattr(tool, "name", "?")
        desc = getattr(tool, "description", "") or "(no description)"
        required = tool.inputSchema.get("required", []) if tool.inputSchema else []
        print(f"  - {name}: {desc}")
        if required:
            print(f"      required: {', '.join(required)}")
    print()


async def call_tool(session: ClientSession, name: str, arguments: Dict[str, Any]) -> bool:
    """Вызывает инструмент и печатает текст ответа; возвращает False при isError."""
    result = await session.call_tool(name, arguments)
    for item in result.content:
        text = getattr(item, "text", None)
        if text is not None:
            print(text)
    return not result.isError


async def run_client(tool: Optional[str] = None, arguments: Optional[Dict[str, Any]] = None) -> bool:
    async with stdio_client(_server_params()) as (read, write):
        async with ClientSession(read, write) as session:
            await session.initialize()
            if tool is None:
                await list_tools(session)
                return True
            return await call_tool(session, tool, arguments or {})


def main() -> None:
    """Точка входа для запуска из командной строки."""
    parser = argparse.ArgumentParser(description="Store MCP client")
    parser.add_argument("tool", nargs="?", help="Имя инструмента; без него выводится список")
    parser.add_argument("args", nargs="*", help="Аргументы key=value")
    ns = parser.parse_args()

    try:
        arguments = parse_arguments(ns.args)
    except ValueError as e:
        parser.error(str(e))

    ok = asyncio.run(run_client(ns.tool, arguments))
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
