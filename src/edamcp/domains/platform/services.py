"""Platform Domain Service.

Navigation, project management and design-file upload on the OnlineEDA
platform. Every public method is an operation boundary: it drives the UI
through ``SessionManager.exclusive()`` and folds any failure, including
authentication errors, into a failed OperationResult.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from edamcp.adapters.remote_ui import RemoteUI, wait_for_selector, wait_for_url_change
from edamcp.domains.session.services import SessionManager
from edamcp.domains.shared.errors import (
    ElementNotFoundError,
    NavigationTimeoutError,
    UploadSourceMissingError,
)
from edamcp.domains.shared.kernel import OperationResult, describe_error

from .value_objects import (
    LIST_PROJECTS_SCRIPT,
    PROJECT_FIELDS,
    DesignFileType,
    NavigationAction,
    PlatformUrls,
    ProjectSelectors,
)

logger = logging.getLogger(__name__)

CONFIRM_DIALOG_TIMEOUT = 10.0


@dataclass
class PlatformService:
    """Operations on the platform's projects and sections.

    Attributes:
        session: The session that owns the remote-UI handle.
        urls: Location builder for the configured platform.
        navigation_timeout: Seconds allowed for page loads and form waits.
        upload_timeout: Seconds allowed for an upload to be confirmed.
    """

    session: SessionManager
    urls: PlatformUrls
    navigation_timeout: float = 30.0
    upload_timeout: float = 30.0
    selectors: ProjectSelectors = field(default_factory=ProjectSelectors)

    # ── Navigation ────────────────────────────────────────────────────

    async def navigate(
        self, action: NavigationAction, project_id: Optional[str] = None
    ) -> OperationResult:
        """Open a platform section; ``projects`` with a project id opens that project."""
        action = NavigationAction(action)
        opens_project = action is NavigationAction.PROJECTS and bool(project_id)
        url = self.urls.project(project_id) if opens_project else self.urls.section(action)

        try:
            async with self.session.exclusive() as ui:
                await self._open(ui, url)
                current_url = await ui.current_url()
        except Exception as exc:
            return OperationResult.fail(f"Navigation failed: {describe_error(exc)}")

        if opens_project:
            self.session.set_current_project(project_id)
        return OperationResult.ok({"action": action.value, "currentUrl": current_url})

    # ── Projects ──────────────────────────────────────────────────────

    async def manage_project(
        self,
        action: str,
        project_name: Optional[str] = None,
        project_type: Optional[str] = None,
        project_id: Optional[str] = None,
    ) -> OperationResult:
        """Dispatch a project action after checking its required fields."""
        if action == "create":
            if not project_name or not project_type:
                return OperationResult.fail(
                    "Project name and type are required for creating a project"
                )
            operation = self.create_project(project_name, project_type)
        elif action == "open":
            if not project_id:
                return OperationResult.fail("Project ID is required for opening a project")
            operation = self.open_project(project_id)
        elif action == "list":
            operation = self.list_projects()
        elif action == "delete":
            if not project_id:
                return OperationResult.fail("Project ID is required for deleting a project")
            operation = self.delete_project(project_id)
        else:
            return OperationResult.fail(f"Unknown action: {action}")

        try:
            return await operation
        except Exception as exc:
            return OperationResult.fail(f"Project operation failed: {describe_error(exc)}")

    async def create_project(self, name: str, project_type: str) -> OperationResult:
        """Fill and submit the new-project form."""
        selectors = self.selectors
        form_url = self.urls.new_project()
        async with self.session.exclusive() as ui:
            await self._open(ui, form_url)
            name_input = await self._wait_for(ui, selectors.name_input)
            await ui.type(name_input, name)
            await ui.select_option(await self._require(ui, selectors.type_select), project_type)

            before = await ui.current_url()
            await ui.click(await self._require(ui, selectors.create_button))
            if not await wait_for_url_change(ui, before, self.navigation_timeout):
                raise NavigationTimeoutError(
                    f"Project form was not submitted within {self.navigation_timeout:g}s"
                )
            current_url = await ui.current_url()

        data: Dict[str, Any] = {
            "projectName": name,
            "projectType": project_type,
            "currentUrl": current_url,
            "message": "Project created successfully",
        }
        project_id = self.urls.project_id_from_url(current_url)
        if project_id:
            data["projectId"] = project_id
            self.session.set_current_project(project_id)
        logger.info("Created %s project %r", project_type, name)
        return OperationResult.ok(data)

    async def open_project(self, project_id: str) -> OperationResult:
        async with self.session.exclusive() as ui:
            await self._open(ui, self.urls.project(project_id))
            current_url = await ui.current_url()
        self.session.set_current_project(project_id)
        return OperationResult.ok({"projectId": project_id, "currentUrl": current_url})

    async def list_projects(self) -> OperationResult:
        async with self.session.exclusive() as ui:
            await self._open(ui, self.urls.projects())
            raw = await ui.evaluate(LIST_PROJECTS_SCRIPT)
        projects = _normalize_projects(raw)
        return OperationResult.ok({"projects": projects, "count": len(projects)})

    async def delete_project(self, project_id: str) -> OperationResult:
        """Delete a project through its settings page, confirming the dialog."""
        selectors = self.selectors
        async with self.session.exclusive() as ui:
            await self._open(ui, self.urls.project_settings(project_id))
            await ui.click(await self._require(ui, selectors.delete_button))
            await self._wait_for(ui, selectors.confirm_dialog, CONFIRM_DIALOG_TIMEOUT)
            await ui.click(await self._require(ui, selectors.confirm_button))

        if self.session.current_project == project_id:
            self.session.set_current_project(None)
        logger.info("Deleted project %s", project_id)
        return OperationResult.ok(
            {"projectId": project_id, "message": "Project deleted successfully"}
        )

    # ── Upload ────────────────────────────────────────────────────────

    async def upload_file(
        self,
        project_id: str,
        file_path: str,
        file_type: Optional[str] = None,
    ) -> OperationResult:
        """Upload a local design file to a project.

        The source path is checked before the session is touched, so a
        missing file never causes any navigation.
        """
        try:
            source = resolve_upload_source(file_path)
        except UploadSourceMissingError as exc:
            return OperationResult.fail(f"File upload failed: {exc}")

        resolved_type = (
            DesignFileType(file_type) if file_type else DesignFileType.from_path(source)
        )
        selectors = self.selectors
        try:
            async with self.session.exclusive() as ui:
                await self._open(ui, self.urls.project_files(project_id))
                file_input = await ui.find(selectors.file_input)
                if file_input is None:
                    raise ElementNotFoundError(
                        selectors.file_input, "file upload input not found on page"
                    )
                await ui.upload_file(file_input, str(source))
                await self._wait_for(ui, selectors.upload_success, self.upload_timeout)
        except Exception as exc:
            return OperationResult.fail(f"File upload failed: {describe_error(exc)}")

        self.session.set_current_project(project_id)
        logger.info("Uploaded %s to project %s", source.name, project_id)
        return OperationResult.ok(
            {
                "projectId": project_id,
                "fileName": source.name,
                "filePath": file_path,
                "absolutePath": str(source),
                "fileType": resolved_type.value,
                "message": "File uploaded successfully",
            }
        )

    # ── Helpers ───────────────────────────────────────────────────────

    async def _open(self, ui: RemoteUI, url: str) -> None:
        logger.debug("Opening %s", url)
        await ui.open(url, wait_until="networkidle", timeout=self.navigation_timeout)

    async def _require(self, ui: RemoteUI, selector: str) -> Any:
        handle = await ui.find(selector)
        if handle is None:
            raise ElementNotFoundError(selector)
        return handle

    async def _wait_for(
        self, ui: RemoteUI, selector: str, timeout: Optional[float] = None
    ) -> Any:
        timeout = self.navigation_timeout if timeout is None else timeout
        handle = await wait_for_selector(ui, selector, timeout)
        if handle is None:
            raise ElementNotFoundError(selector, f"did not appear within {timeout:g}s")
        return handle


def resolve_upload_source(file_path: str) -> Path:
    """Resolve ``file_path`` to an absolute, existing, readable file.

    Raises:
        UploadSourceMissingError: If the path is not a readable regular file.
    """
    source = Path(file_path).expanduser()
    try:
        source = source.resolve()
    except (OSError, RuntimeError):
        raise UploadSourceMissingError(file_path) from None
    if not source.is_file() or not os.access(source, os.R_OK):
        raise UploadSourceMissingError(str(source))
    return source


def _normalize_projects(raw: Any) -> List[Dict[str, Optional[str]]]:
    """Coerce the page's project listing into uniform dicts."""
    if not isinstance(raw, list):
        return []
    projects: List[Dict[str, Optional[str]]] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        projects.append(
            {
                key: (str(item[key]) if item.get(key) not in (None, "") else None)
                for key in PROJECT_FIELDS
            }
        )
    return projects
