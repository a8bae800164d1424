"""Render module - HTML to PDF rendering using Playwright."""

from .schemas import RenderOptions
from .session import RendererSession, RenderPage, SessionFactory, session_factory_from_settings

__all__ = [
    "RenderOptions",
    "RendererSession",
    "RenderPage",
    "SessionFactory",
    "session_factory_from_settings",
]
