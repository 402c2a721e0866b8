from bookstack_mcp.web_server.web_server import BookStackWebServer

__all__ = ["BookStackWebServer"]
