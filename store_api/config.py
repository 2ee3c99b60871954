"""Конфигурация приложения"""
import os

from dotenv import load_dotenv

load_dotenv()

# MongoDB настройки
#
# Имя базы берётся из URI (mongodb://host:27017/<db>); MONGODB_DB позволяет
# переопределить его, не трогая строку подключения.
MONGODB_URI = os.getenv("MONGODB_URI", "mongodb://localhost:27017/mcpnodefil")
MONGODB_DB = os.getenv("MONGODB_DB") or None
DEFAULT_DB_NAME = "mcpnodefil"

USERS_COLLECTION = "users"
PRODUCTS_COLLECTION = "products"

# HTTP сервер
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]

# Логирование
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Стоимость bcrypt (2^rounds итераций)
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "10"))

# MCP сервер настройки
MCP_SERVER_NAME = os.getenv("MCP_SERVER_NAME", "store-mcp-server")
MCP_SERVER_VERSION = "1.0.0"
