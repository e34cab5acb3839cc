"""Platform Domain Value Objects.

Locations, selectors and vocabularies of the OnlineEDA web UI.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath
from typing import ClassVar, Dict, Optional, Tuple
from urllib.parse import quote


class NavigationAction(str, Enum):
    """Top-level sections reachable through the navigate tool."""

    HOME = "home"
    PROJECTS = "projects"
    NEW_PROJECT = "new-project"
    DOCUMENTATION = "documentation"
    SETTINGS = "settings"


class DesignFileType(str, Enum):
    """File categories accepted by the project file upload."""

    VERILOG = "verilog"
    SYSTEMVERILOG = "systemverilog"
    VHDL = "vhdl"
    CONSTRAINTS = "constraints"
    OTHER = "other"

    @classmethod
    def from_path(cls, path: PurePath) -> "DesignFileType":
        """Infer the file type from the file extension."""
        return _EXTENSION_TYPES.get(path.suffix.lower(), cls.OTHER)


_EXTENSION_TYPES: Dict[str, DesignFileType] = {
    ".v": DesignFileType.VERILOG,
    ".vh": DesignFileType.VERILOG,
    ".sv": DesignFileType.SYSTEMVERILOG,
    ".svh": DesignFileType.SYSTEMVERILOG,
    ".vhd": DesignFileType.VHDL,
    ".vhdl": DesignFileType.VHDL,
    ".sdc": DesignFileType.CONSTRAINTS,
    ".xdc": DesignFileType.CONSTRAINTS,
}


@dataclass(frozen=True)
class PlatformUrls:
    """Derives every platform location from the base URL.

    Examples:
        >>> urls = PlatformUrls("https://onlineeda.arcas-da.com")
        >>> urls.project_verify("p42")
        'https://onlineeda.arcas-da.com/projects/p42/verify'
    """

    base_url: str

    _SECTION_PATHS: ClassVar[Dict[NavigationAction, str]] = {
        NavigationAction.HOME: "/dashboard",
        NavigationAction.PROJECTS: "/projects",
        NavigationAction.NEW_PROJECT: "/projects/new",
        NavigationAction.DOCUMENTATION: "/docs",
        NavigationAction.SETTINGS: "/settings",
    }

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    def section(self, action: NavigationAction) -> str:
        return f"{self.base_url}{self._SECTION_PATHS[NavigationAction(action)]}"

    def projects(self) -> str:
        return self.section(NavigationAction.PROJECTS)

    def new_project(self) -> str:
        return self.section(NavigationAction.NEW_PROJECT)

    def project(self, project_id: str) -> str:
        return f"{self.base_url}/projects/{quote(project_id, safe='')}"

    def project_settings(self, project_id: str) -> str:
        return f"{self.project(project_id)}/settings"

    def project_verify(self, project_id: str) -> str:
        return f"{self.project(project_id)}/verify"

    def project_files(self, project_id: str) -> str:
        return f"{self.project(project_id)}/files"

    def project_id_from_url(self, url: str) -> Optional[str]:
        """Extract the project id from a ``/projects/<id>`` URL, if any."""
        prefix = f"{self.base_url}/projects/"
        if not url.startswith(prefix):
            return None
        project_id = url[len(prefix):].split("/", 1)[0].split("?", 1)[0].split("#", 1)[0]
        if not project_id or project_id == "new":
            return None
        return project_id


@dataclass(frozen=True)
class ProjectSelectors:
    """CSS selectors of the project pages."""

    name_input: str = 'input[name="projectName"], #projectName'
    type_select: str = 'select[name="projectType"], #projectType'
    create_button: str = 'button[type="submit"], .create-project-btn'
    delete_button: str = '.delete-project-btn, button[data-action="delete"]'
    confirm_dialog: str = ".confirm-delete, .modal-confirm"
    confirm_button: str = '.confirm-delete, button[data-confirm="delete"]'
    file_input: str = 'input[type="file"]'
    upload_success: str = ".upload-success, .file-uploaded"


LIST_PROJECTS_SCRIPT = """() => {
    const items = document.querySelectorAll('.project-item, .project-card');
    const text = (el, sel) => {
        const node = el.querySelector(sel);
        return node && node.textContent ? node.textContent.trim() : null;
    };
    return Array.from(items).map(el => ({
        id: el.getAttribute('data-project-id') || el.id || null,
        name: text(el, '.project-name'),
        type: text(el, '.project-type'),
        status: text(el, '.project-status'),
    }));
}"""

PROJECT_FIELDS: Tuple[str, ...] = ("id", "name", "type", "status")
