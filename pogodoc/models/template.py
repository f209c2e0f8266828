"""
Pydantic models for the template endpoints.

Field names are snake_case in Python and camelCase on the wire.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class TemplateType(str, Enum):
    """Rendering engine a template is written for."""

    DOCX = "docx"
    XLSX = "xlsx"
    PPTX = "pptx"
    EJS = "ejs"
    HTML = "html"
    LATEX = "latex"
    REACT = "react"


class TemplateMetadata(BaseModel):
    """
    Descriptive information persisted alongside a template.

    Sent as the templateInfo member of save and update requests.

    Attributes:
        title: Display title
        description: Free-form description
        type: Rendering engine kind
        categories: Category tags, order and duplicates preserved
        sample_data: Opaque data used by the service to render previews
        source_code: Optional source code blob
    """

    title: str
    description: str
    type: TemplateType
    categories: list[str] = Field(default_factory=list)
    sample_data: Any = Field(
        ...,
        alias="sampleData",
        description="Sample input used to render the png/pdf previews",
    )
    source_code: Optional[str] = Field(None, alias="sourceCode")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {
                    "title": "Invoice",
                    "description": "Monthly invoice",
                    "type": "react",
                    "categories": ["invoice"],
                    "sampleData": {"name": "John Doe"},
                }
            ]
        },
    }


class InitTemplateCreationResponse(BaseModel):
    """Response of the template creation reservation endpoint."""

    template_id: str = Field(..., alias="templateId")
    presigned_template_upload_url: str = Field(
        ...,
        alias="presignedTemplateUploadUrl",
        description="Pre-signed URL accepting the zipped template archive",
    )

    model_config = {"populate_by_name": True, "extra": "allow"}


class GenerateTemplatePreviewsRequest(BaseModel):
    """Body of the preview generation endpoint."""

    type: TemplateType
    data: Any

    model_config = {"populate_by_name": True}


class PreviewJob(BaseModel):
    """A single preview rendering job."""

    job_id: str = Field(..., alias="jobId")

    model_config = {"populate_by_name": True, "extra": "allow"}


class GenerateTemplatePreviewsResponse(BaseModel):
    """Job identifiers of the png and pdf previews."""

    png_preview: PreviewJob = Field(..., alias="pngPreview")
    pdf_preview: PreviewJob = Field(..., alias="pdfPreview")

    model_config = {"populate_by_name": True, "extra": "allow"}


class PreviewIds(BaseModel):
    """Preview job identifiers referenced by save and update requests."""

    png_job_id: str = Field(..., alias="pngJobId")
    pdf_job_id: str = Field(..., alias="pdfJobId")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_previews(cls, previews: GenerateTemplatePreviewsResponse) -> "PreviewIds":
        return cls(
            png_job_id=previews.png_preview.job_id,
            pdf_job_id=previews.pdf_preview.job_id,
        )


class SaveCreatedTemplateRequest(BaseModel):
    """Body of the save-created-template endpoint."""

    template_info: TemplateMetadata = Field(..., alias="templateInfo")
    preview_ids: PreviewIds = Field(..., alias="previewIds")

    model_config = {"populate_by_name": True}


class UpdateTemplateRequest(BaseModel):
    """Body of the update-template endpoint."""

    template_info: TemplateMetadata = Field(..., alias="templateInfo")
    preview_ids: PreviewIds = Field(..., alias="previewIds")
    content_id: str = Field(
        ...,
        alias="contentId",
        description="Identifier reserved for the new template content",
    )

    model_config = {"populate_by_name": True}
