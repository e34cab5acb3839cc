"""Composition root of the OnlineEDA MCP server.

The container wires the bounded contexts together once per process:
- Session Context: login state machine and the single remote-UI handle
- Platform Context: navigation, projects and file upload
- Verification Context: verification runs and result extraction
- Intent Context: natural-language request resolution
- Dispatch Context: tool registry and the generic dispatcher

Usage:
    from edamcp.container import ServiceContainer

    container = ServiceContainer.build()
    result = await container.dispatcher.invoke("arcas_onlineeda_navigate", {"action": "home"})

Nothing here is global; the server receives the container by reference.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from edamcp.adapters import PlaywrightRemoteUI, RemoteUI, RemoteUIFactory
from edamcp.config import OnlineEdaConfig, load_config
from edamcp.domains.dispatch import Dispatcher, ToolRegistry
from edamcp.domains.intent import IntentResolver
from edamcp.domains.platform import PlatformService, PlatformUrls
from edamcp.domains.session import EventPublisher, SessionManager
from edamcp.domains.verification import VerificationOrchestrator
from edamcp.tools import build_registry

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """All services of one server process.

    Attributes:
        config: Effective configuration.
        session: Owner of the browser handle and login state.
        urls: Platform location builder.
        platform: Navigation, project and upload operations.
        orchestrator: Verification runs.
        resolver: Natural-language resolution.
        registry: The registered tools.
        dispatcher: Validating entry point for every tool call.
    """

    config: OnlineEdaConfig
    session: SessionManager
    urls: PlatformUrls
    platform: PlatformService
    orchestrator: VerificationOrchestrator
    resolver: IntentResolver
    registry: ToolRegistry
    dispatcher: Dispatcher

    @classmethod
    def build(
        cls,
        config: Optional[OnlineEdaConfig] = None,
        ui_factory: Optional[RemoteUIFactory] = None,
        event_publisher: Optional[EventPublisher] = None,
    ) -> "ServiceContainer":
        """Create every service.

        Args:
            config: Configuration; read from the environment when omitted.
            ui_factory: Remote-UI factory; launches Playwright Chromium when
                omitted.
            event_publisher: Optional sink for session events.
        """
        config = config or load_config()
        if ui_factory is None:
            ui_factory = _playwright_factory(config)

        session = SessionManager(ui_factory, config, event_publisher=event_publisher)
        urls = PlatformUrls(config.base_url)
        platform = PlatformService(
            session,
            urls,
            navigation_timeout=config.navigation_timeout,
            upload_timeout=config.upload_timeout,
        )
        orchestrator = VerificationOrchestrator(
            session, urls, navigation_timeout=config.navigation_timeout
        )
        resolver = IntentResolver()
        registry = build_registry(platform, orchestrator, resolver)
        logger.debug("Container built with tools: %s", ", ".join(registry.names()))

        return cls(
            config=config,
            session=session,
            urls=urls,
            platform=platform,
            orchestrator=orchestrator,
            resolver=resolver,
            registry=registry,
            dispatcher=Dispatcher(registry),
        )

    async def shutdown(self) -> None:
        """Release the browser; safe to call more than once."""
        await self.session.close()


def _playwright_factory(config: OnlineEdaConfig) -> RemoteUIFactory:
    async def launch() -> RemoteUI:
        return await PlaywrightRemoteUI.launch(headless=config.headless)

    return launch
