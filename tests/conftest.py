"""
Pytest configuration and fixtures
"""

from typing import Any, Dict, List, Optional, Tuple

import pytest

from pogodoc.models import (
    FilePayload,
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
    TemplateMetadata,
    UpdateTemplateRequest,
)
from pogodoc.services.gateway import ServiceGateway

UPLOAD_URL = "https://uploads.example.com/tpl?X-Amz-Signature=abc"
DATA_URL = "https://uploads.example.com/data?X-Amz-Signature=def"
TEMPLATE_URL = "https://uploads.example.com/html?X-Amz-Signature=ghi"


class CallLog:
    """Ordered record of every gateway call and upload."""

    def __init__(self):
        self.calls: List[Tuple[str, Dict[str, Any]]] = []

    def record(self, name: str, **kwargs) -> None:
        self.calls.append((name, kwargs))

    @property
    def names(self) -> List[str]:
        return [name for name, _ in self.calls]

    def last(self, name: str) -> Dict[str, Any]:
        return [kwargs for n, kwargs in self.calls if n == name][-1]


class RecordingGateway(ServiceGateway):
    """In-memory ServiceGateway that records calls and returns canned responses."""

    def __init__(self, log: CallLog):
        self.log = log
        self.template_ids = ["tpl-1"]
        self.upload_url = UPLOAD_URL
        self.previews = {"png": "png-1", "pdf": "pdf-1"}
        self.render_job = {
            "jobId": "job-7",
            "presignedDataUploadUrl": DATA_URL,
            "presignedTemplateUploadUrl": TEMPLATE_URL,
        }
        self.statuses: List[str] = ["done"]
        self.failures: Dict[str, Exception] = {}

    def _enter(self, name: str, **kwargs) -> None:
        self.log.record(name, **kwargs)
        if name in self.failures:
            raise self.failures[name]

    async def init_template_creation(self) -> InitTemplateCreationResponse:
        self._enter("init_template_creation")
        template_id = self.template_ids.pop(0)
        return InitTemplateCreationResponse(
            template_id=template_id, presigned_template_upload_url=self.upload_url
        )

    async def extract_template_files(self, template_id: str) -> None:
        self._enter("extract_template_files", template_id=template_id)

    async def generate_template_previews(
        self, template_id: str, request: GenerateTemplatePreviewsRequest
    ) -> GenerateTemplatePreviewsResponse:
        self._enter("generate_template_previews", template_id=template_id, request=request)
        return GenerateTemplatePreviewsResponse.model_validate(
            {
                "pngPreview": {"jobId": self.previews["png"]},
                "pdfPreview": {"jobId": self.previews["pdf"]},
            }
        )

    async def save_created_template(
        self, template_id: str, request: SaveCreatedTemplateRequest
    ) -> None:
        self._enter("save_created_template", template_id=template_id, request=request)

    async def update_template(self, template_id: str, request: UpdateTemplateRequest) -> None:
        self._enter("update_template", template_id=template_id, request=request)

    async def initialize_render_job(
        self, request: InitializeRenderJobRequest
    ) -> InitializeRenderJobResponse:
        self._enter("initialize_render_job", request=request)
        return InitializeRenderJobResponse.model_validate(self.render_job)

    async def start_render_job(
        self, job_id: str, request: StartRenderJobRequest
    ) -> StartRenderJobResponse:
        self._enter("start_render_job", job_id=job_id, request=request)
        return StartRenderJobResponse(job_id=job_id)

    async def start_immediate_render(
        self, request: StartImmediateRenderRequest
    ) -> StartImmediateRenderResponse:
        self._enter("start_immediate_render", request=request)
        return StartImmediateRenderResponse(url="https://cdn.example.com/out.pdf")

    async def get_job_status(self, job_id: str) -> JobStatusResponse:
        self._enter("get_job_status", job_id=job_id)
        status = self.statuses.pop(0) if len(self.statuses) > 1 else self.statuses[0]
        body: Dict[str, Any] = {"jobId": job_id, "status": status}
        if status == "done":
            body["output"] = {"data": {"url": "https://cdn.example.com/out.pdf"}}
        return JobStatusResponse.model_validate(body)


class RecordingUploader:
    """ObjectUploader stand-in that records uploads into the shared call log."""

    def __init__(self, log: CallLog):
        self.log = log
        self.failure: Optional[Exception] = None

    async def upload(self, url: str, payload: FilePayload, content_type: str) -> None:
        self.log.record("upload", url=url, payload=payload, content_type=content_type)
        if self.failure is not None:
            raise self.failure


@pytest.fixture
def call_log():
    return CallLog()


@pytest.fixture
def gateway(call_log):
    return RecordingGateway(call_log)


@pytest.fixture
def uploader(call_log):
    return RecordingUploader(call_log)


@pytest.fixture
def template_payload():
    """Zip-like 8 byte archive"""
    return FilePayload(b"PK\x03\x04....")


@pytest.fixture
def template_metadata():
    return TemplateMetadata(
        title="T",
        description="D",
        type="react",
        categories=["invoice"],
        sample_data={"a": 1},
    )
