"""Pydantic models for render jobs and the documents endpoints."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator

from .template import TemplateType


class RenderTarget(str, Enum):
    """Output format of a rendered document."""

    PDF = "pdf"
    HTML = "html"
    DOCX = "docx"
    XLSX = "xlsx"
    PPTX = "pptx"
    PNG = "png"
    JPG = "jpg"


class JobStatus(str, Enum):
    """Status values reported for a render job."""

    PENDING = "pending"
    RUNNING = "running"
    DONE = "done"
    FAILED = "failed"


class RenderSpec(BaseModel):
    """
    Everything needed to render a document.

    Either template_id (a saved template) or template (inline source)
    must be provided.

    Attributes:
        type: Rendering engine kind
        target: Output format
        template_id: Identifier of a saved template
        template: Inline template source, uploaded as text/html
        data: Opaque input data, uploaded as JSON
        format_opts: Optional output formatting options
        should_wait_for_render_completion: Ask the service to finish the
            render before answering the start request
    """

    type: TemplateType
    target: RenderTarget
    template_id: Optional[str] = Field(None, alias="templateId")
    template: Optional[str] = None
    data: Any = None
    format_opts: Optional[dict[str, Any]] = Field(None, alias="formatOpts")
    should_wait_for_render_completion: Optional[bool] = Field(
        None, alias="shouldWaitForRenderCompletion"
    )

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {
                    "type": "html",
                    "target": "pdf",
                    "templateId": "tpl-1",
                    "data": {"name": "John Doe"},
                }
            ]
        },
    }

    @model_validator(mode="after")
    def _require_template_source(self) -> "RenderSpec":
        if not self.template_id and not self.template:
            raise ValueError("Either template_id or template must be provided")
        return self


class InitializeRenderJobRequest(BaseModel):
    """Body of the render job reservation endpoint."""

    type: TemplateType
    target: RenderTarget
    template_id: Optional[str] = Field(None, alias="templateId")
    format_opts: Optional[dict[str, Any]] = Field(None, alias="formatOpts")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_spec(cls, spec: RenderSpec) -> "InitializeRenderJobRequest":
        return cls(
            type=spec.type,
            target=spec.target,
            template_id=spec.template_id,
            format_opts=spec.format_opts,
        )


class InitializeRenderJobResponse(BaseModel):
    """Reserved job id plus the upload URLs the service wants filled."""

    job_id: str = Field(..., alias="jobId")
    presigned_data_upload_url: Optional[str] = Field(
        None, alias="presignedDataUploadUrl"
    )
    presigned_template_upload_url: Optional[str] = Field(
        None, alias="presignedTemplateUploadUrl"
    )

    model_config = {"populate_by_name": True, "extra": "allow"}


class StartRenderJobRequest(BaseModel):
    """Body of the start-render endpoint."""

    should_wait_for_render_completion: Optional[bool] = Field(
        None, alias="shouldWaitForRenderCompletion"
    )

    model_config = {"populate_by_name": True}


class OutputData(BaseModel):
    url: str

    model_config = {"extra": "allow"}


class JobOutput(BaseModel):
    """Final output descriptor of a finished job."""

    data: OutputData
    metadata: Optional[dict[str, Any]] = None

    model_config = {"extra": "allow"}


class StartRenderJobResponse(BaseModel):
    """Response of the start-render endpoint; status is not yet terminal."""

    job_id: str = Field(..., alias="jobId")
    output: Optional[JobOutput] = None

    model_config = {"populate_by_name": True, "extra": "allow"}


class JobStatusResponse(BaseModel):
    """Status of a render job as reported by the service."""

    job_id: Optional[str] = Field(None, alias="jobId")
    status: str
    output: Optional[JobOutput] = None

    model_config = {"populate_by_name": True, "extra": "allow"}

    @property
    def is_done(self) -> bool:
        return self.status == JobStatus.DONE.value


class StartImmediateRenderRequest(BaseModel):
    """Body of the synchronous render endpoint."""

    type: TemplateType
    target: RenderTarget
    template_id: Optional[str] = Field(None, alias="templateId")
    template: Optional[str] = None
    data: Any = None
    format_opts: Optional[dict[str, Any]] = Field(None, alias="formatOpts")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_spec(cls, spec: RenderSpec) -> "StartImmediateRenderRequest":
        return cls(
            type=spec.type,
            target=spec.target,
            template_id=spec.template_id,
            template=spec.template or None,
            data=spec.data,
            format_opts=spec.format_opts,
        )


class StartImmediateRenderResponse(BaseModel):
    """Result of a synchronous render."""

    url: str

    model_config = {"extra": "allow"}
