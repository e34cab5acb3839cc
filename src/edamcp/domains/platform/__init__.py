"""Platform Bounded Context.

Navigation, project management and design-file upload on the OnlineEDA
web platform, all driven through the session's exclusive region.
"""
from .value_objects import (
    DesignFileType, NavigationAction, PlatformUrls,
    ProjectSelectors,
)
from .services import PlatformService, resolve_upload_source

__all__ = [
    "DesignFileType", "NavigationAction", "PlatformUrls",
    "ProjectSelectors",
    "PlatformService", "resolve_upload_source",
]
