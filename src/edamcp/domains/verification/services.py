"""Verification Domain Service.

Drives one verification run from the project's verify page to its
completion marker and reads the results back. Steps up to the completion
wait are fatal: a run that never started or never finished produces a
failed OperationResult and no partial results.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Optional

from edamcp.adapters.remote_ui import RemoteUI, wait_for_any, wait_for_selector
from edamcp.domains.platform.value_objects import PlatformUrls
from edamcp.domains.session.services import SessionManager
from edamcp.domains.shared.errors import (
    ElementNotFoundError,
    VerificationStartTimeoutError,
    VerificationTimeoutError,
)
from edamcp.domains.shared.kernel import OperationResult, describe_error

from .extraction import extract_results
from .value_objects import VerificationOptions, VerificationSelectors

logger = logging.getLogger(__name__)

VERIFICATION_START_TIMEOUT = 5.0


@dataclass
class VerificationOrchestrator:
    """Runs verifications through the session's exclusive region.

    Usage:
        orchestrator = VerificationOrchestrator(session, urls)
        result = await orchestrator.run("p42", "formal", VerificationOptions(depth=20))
    """

    session: SessionManager
    urls: PlatformUrls
    navigation_timeout: float = 30.0
    start_timeout: float = VERIFICATION_START_TIMEOUT
    selectors: VerificationSelectors = field(default_factory=VerificationSelectors)

    async def run(
        self,
        project_id: str,
        verification_type: str,
        options: Optional[VerificationOptions] = None,
    ) -> OperationResult:
        options = options or VerificationOptions()
        try:
            async with self.session.exclusive() as ui:
                await self._configure(ui, project_id, verification_type, options)
                await self._start(ui)
                await self._await_completion(ui, options.effective_timeout)
                results = await extract_results(ui)
        except Exception as exc:
            logger.warning(
                "Verification %s on %s failed: %s",
                verification_type, project_id, describe_error(exc),
            )
            return OperationResult.fail(f"Verification failed: {describe_error(exc)}")

        self.session.set_current_project(project_id)
        logger.info(
            "Verification %s on %s completed (passed=%s, violations=%d)",
            verification_type, project_id, results.passed, len(results.violations),
        )
        return OperationResult.ok(
            {
                "projectId": project_id,
                "verificationType": verification_type,
                "results": results.to_dict(),
            }
        )

    async def _configure(
        self,
        ui: RemoteUI,
        project_id: str,
        verification_type: str,
        options: VerificationOptions,
    ) -> None:
        selectors = self.selectors
        await ui.open(
            self.urls.project_verify(project_id),
            wait_until="networkidle",
            timeout=self.navigation_timeout,
        )
        await ui.select_option(await self._require(ui, selectors.type_select), verification_type)

        if options.timeout is not None:
            await ui.type(
                await self._require(ui, selectors.timeout_input), format_seconds(options.timeout)
            )
        if options.depth is not None:
            await ui.type(await self._require(ui, selectors.depth_input), str(options.depth))
        if options.properties:
            properties_input = await ui.find(selectors.properties_input)
            if properties_input is None:
                logger.debug("No properties field on verify page; skipping %s", options.properties)
            else:
                await ui.type(properties_input, ",".join(options.properties))

    async def _start(self, ui: RemoteUI) -> None:
        selectors = self.selectors
        await ui.click(await self._require(ui, selectors.run_button))
        # a run that already finished never shows the running marker
        started = await wait_for_any(
            ui, (selectors.running_indicator, selectors.complete_indicator), self.start_timeout
        )
        if started is None:
            raise VerificationStartTimeoutError(
                f"Verification did not start within {self.start_timeout:g}s"
            )

    async def _await_completion(self, ui: RemoteUI, timeout: float) -> None:
        logger.debug("Waiting up to %.0fs for verification to complete", timeout)
        if await wait_for_selector(ui, self.selectors.complete_indicator, timeout) is None:
            raise VerificationTimeoutError(
                f"Verification did not complete within {timeout:g}s"
            )

    @staticmethod
    async def _require(ui: RemoteUI, selector: str) -> Any:
        handle = await ui.find(selector)
        if handle is None:
            raise ElementNotFoundError(selector)
        return handle


def format_seconds(value: float) -> str:
    """Plain decimal text for a form field, without exponent or rounding.

    Examples:
        >>> format_seconds(1234567.0)
        '1234567'
        >>> format_seconds(2.5)
        '2.5'
        >>> format_seconds(0.00001)
        '0.00001'
    """
    if float(value).is_integer():
        return str(int(value))
    return format(Decimal(repr(float(value))), "f")
