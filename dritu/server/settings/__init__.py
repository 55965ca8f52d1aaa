from dritu.server.settings.config import Settings, settings

__all__ = ["Settings", "settings"]
