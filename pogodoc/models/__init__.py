"""Pydantic models for Pogodoc request/response schemas."""

from .payload import FilePayload
from .template import (
    GenerateTemplatePreviewsRequest,
    GenerateTemplatePreviewsResponse,
    InitTemplateCreationResponse,
    PreviewIds,
    PreviewJob,
    SaveCreatedTemplateRequest,
    TemplateMetadata,
    TemplateType,
    UpdateTemplateRequest,
)
from .render import (
    InitializeRenderJobRequest,
    InitializeRenderJobResponse,
    JobOutput,
    JobStatus,
    JobStatusResponse,
    OutputData,
    RenderSpec,
    RenderTarget,
    StartImmediateRenderRequest,
    StartImmediateRenderResponse,
    StartRenderJobRequest,
    StartRenderJobResponse,
)

__all__ = [
    "FilePayload",
    "GenerateTemplatePreviewsRequest",
    "GenerateTemplatePreviewsResponse",
    "InitTemplateCreationResponse",
    "PreviewIds",
    "PreviewJob",
    "SaveCreatedTemplateRequest",
    "TemplateMetadata",
    "TemplateType",
    "UpdateTemplateRequest",
    "InitializeRenderJobRequest",
    "InitializeRenderJobResponse",
    "JobOutput",
    "JobStatus",
    "JobStatusResponse",
    "OutputData",
    "RenderSpec",
    "RenderTarget",
    "StartImmediateRenderRequest",
    "StartImmediateRenderResponse",
    "StartRenderJobRequest",
    "StartRenderJobResponse",
]
