"""
Pogodoc SDK

Client for the Pogodoc document generation service: save and update
templates, and render documents from them.

Usage:
    from pogodoc import PogodocClient, RenderSpec

    async with PogodocClient.from_env() as client:
        result = await client.generate_document(
            RenderSpec(type="html", target="pdf", template_id="tpl-1", data={"name": "John Doe"})
        )
        print(result.output.data.url)
"""

from .client import PogodocClient
from .config import DEFAULT_BASE_URL, PogodocSettings
from .exceptions import (
    ConfigurationError,
    EmptyFileError,
    FileLoadError,
    FileOpenError,
    FileReadError,
    InvalidArgumentError,
    JobNotCompletedError,
    OperationCancelledError,
    PathResolutionError,
    PogodocError,
    ServiceError,
    UploadError,
)
from .models import (
    FilePayload,
    JobStatusResponse,
    RenderSpec,
    RenderTarget,
    StartImmediateRenderResponse,
    StartRenderJobResponse,
    TemplateMetadata,
    TemplateType,
)

__all__ = [
    # Client
    "PogodocClient",
    "PogodocSettings",
    "DEFAULT_BASE_URL",

    # Models
    "FilePayload",
    "JobStatusResponse",
    "RenderSpec",
    "RenderTarget",
    "StartImmediateRenderResponse",
    "StartRenderJobResponse",
    "TemplateMetadata",
    "TemplateType",

    # Exceptions
    "PogodocError",
    "ConfigurationError",
    "InvalidArgumentError",
    "FileLoadError",
    "PathResolutionError",
    "FileOpenError",
    "FileReadError",
    "EmptyFileError",
    "UploadError",
    "ServiceError",
    "JobNotCompletedError",
    "OperationCancelledError",
]
