from __future__ import annotations

from typing import Callable, Optional, Protocol

from ..models import RepairHandler, RepairOptions
from .registry import PluginRegistry


class HandlerFactory(Protocol):
    def __call__(self, options: RepairOptions) -> Optional[RepairHandler]:
        ...


class FenceRenderer(Protocol):
    def supports(self, language: str) -> bool:
        ...

    def render(self, code: str, language: str) -> str:
        ...


FenceRendererFactory = Callable[[], FenceRenderer]

handler_plugins = PluginRegistry[HandlerFactory]("Repair handler")
fence_plugins = PluginRegistry[FenceRendererFactory]("Fence renderer")


def register_handler(name: str, factory: HandlerFactory) -> None:
    handler_plugins.register(name, factory)


def register_fence_renderer(name: str, factory: FenceRendererFactory) -> None:
    fence_plugins.register(name, factory)


def get_handler_factory(name: str) -> HandlerFactory:
    return handler_plugins.get(name)


def get_fence_renderer_factory(name: str) -> FenceRendererFactory:
    return fence_plugins.get(name)


def available_handlers() -> list[str]:
    return handler_plugins.names()


def available_fence_renderers() -> list[str]:
    return fence_plugins.names()


__all__ = [
    "FenceRenderer",
    "HandlerFactory",
    "available_fence_renderers",
    "available_handlers",
    "fence_plugins",
    "get_fence_renderer_factory",
    "get_handler_factory",
    "handler_plugins",
    "register_fence_renderer",
    "register_handler",
]
