"""Configuration adapters."""

from map_route_planner.adapters.config.app_config import AppConfig

__all__ = ["AppConfig"]
