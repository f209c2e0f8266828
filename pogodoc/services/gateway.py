"""
ServiceGateway abstraction over the Pogodoc API.

Defines the capabilities the orchestrators depend on, allowing the
HTTP implementation to be swapped (e.g. for an in-memory fake in tests).
"""

from abc import ABC, abstractmethod

from ..models import (
    GenerateTemplatePreviewsRequest,
    GenerateTemplatePreviewsResponse,
    InitializeRenderJobRequest,
    InitializeRenderJobResponse,
    InitTemplateCreationResponse,
    JobStatusResponse,
    SaveCreatedTemplateRequest,
    StartImmediateRenderRequest,
    StartImmediateRenderResponse,
    StartRenderJobRequest,
    StartRenderJobResponse,
    UpdateTemplateRequest,
)


class ServiceGateway(ABC):
    """
    Abstract base class for the Pogodoc service endpoints.

    Each method is a single request/response. Implementations raise
    ServiceError on failure and never retry.

    Implementations:
    - HttpServiceGateway: httpx-based client for the real service
    """

    @abstractmethod
    async def init_template_creation(self) -> InitTemplateCreationResponse:
        """
        Reserve a template id and an upload URL for its archive.

        Returns:
            InitTemplateCreationResponse: templateId and presignedTemplateUploadUrl
        """
        pass

    @abstractmethod
    async def extract_template_files(self, template_id: str) -> None:
        """Ask the service to unpack the uploaded archive of template_id."""
        pass

    @abstractmethod
    async def generate_template_previews(
        self, template_id: str, request: GenerateTemplatePreviewsRequest
    ) -> GenerateTemplatePreviewsResponse:
        """
        Start png and pdf preview renders for template_id.

        Returns:
            GenerateTemplatePreviewsResponse: pngPreview.jobId and pdfPreview.jobId
        """
        pass

    @abstractmethod
    async def save_created_template(
        self, template_id: str, request: SaveCreatedTemplateRequest
    ) -> None:
        """Persist a freshly created template with its metadata and previews."""
        pass

    @abstractmethod
    async def update_template(
        self, template_id: str, request: UpdateTemplateRequest
    ) -> None:
        """Point an existing template at new content, metadata and previews."""
        pass

    @abstractmethod
    async def initialize_render_job(
        self, request: InitializeRenderJobRequest
    ) -> InitializeRenderJobResponse:
        """
        Reserve a render job.

        Returns:
            InitializeRenderJobResponse: jobId plus optional data/template upload URLs
        """
        pass

    @abstractmethod
    async def start_render_job(
        self, job_id: str, request: StartRenderJobRequest
    ) -> StartRenderJobResponse:
        """Start rendering a reserved job whose inputs have been uploaded."""
        pass

    @abstractmethod
    async def start_immediate_render(
        self, request: StartImmediateRenderRequest
    ) -> StartImmediateRenderResponse:
        """Render synchronously and return the output URL."""
        pass

    @abstractmethod
    async def get_job_status(self, job_id: str) -> JobStatusResponse:
        """Fetch the current status of a render job."""
        pass
