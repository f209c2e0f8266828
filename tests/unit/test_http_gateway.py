"""
Unit tests for HttpServiceGateway.

Checks method/path mapping, request bodies and error translation
against an httpx.MockTransport.
"""

import json

import httpx
import pytest

from pogodoc.exceptions import ServiceError
from pogodoc.models import (
    GenerateTemplatePreviewsRequest,
    InitializeRenderJobRequest,
    PreviewIds,
    SaveCreatedTemplateRequest,
    StartImmediateRenderRequest,
    StartRenderJobRequest,
    TemplateMetadata,
    UpdateTemplateRequest,
)
from pogodoc.services.http_gateway import HttpServiceGateway

BASE_URL = "https://api.pogodoc.com/v1"


class FakeService:
    """Records requests and answers from a route table."""

    def __init__(self):
        self.requests = []
        self.routes = {}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        status_code, body = self.routes.get(key, (200, None))
        if body is None:
            return httpx.Response(status_code)
        return httpx.Response(status_code, json=body)

    @property
    def last_body(self):
        return json.loads(self.requests[-1].content)


@pytest.fixture
def service():
    return FakeService()


@pytest.fixture
def gateway(service):
    client = httpx.AsyncClient(
        base_url=BASE_URL,
        headers={"Authorization": "Bearer secret-token"},
        transport=httpx.MockTransport(service.handler),
    )
    return HttpServiceGateway(client)


@pytest.fixture
def metadata():
    return TemplateMetadata(
        title="T",
        description="D",
        type="react",
        categories=["invoice", "report"],
        sample_data={"a": 1},
        source_code="src",
    )


class TestTemplateEndpoints:
    """Template capability mapping."""

    @pytest.mark.asyncio
    async def test_init_template_creation(self, gateway, service):
        service.routes[("GET", "/v1/templates/init")] = (
            200,
            {"templateId": "tpl-1", "presignedTemplateUploadUrl": "https://s3/put"},
        )

        response = await gateway.init_template_creation()

        assert response.template_id == "tpl-1"
        assert response.presigned_template_upload_url == "https://s3/put"
        assert service.requests[0].headers["Authorization"] == "Bearer secret-token"

    @pytest.mark.asyncio
    async def test_extract_template_files(self, gateway, service):
        await gateway.extract_template_files("tpl-1")

        assert service.requests[0].method == "PATCH"
        assert service.requests[0].url.path == "/v1/templates/tpl-1/unzip"

    @pytest.mark.asyncio
    async def test_generate_template_previews(self, gateway, service):
        service.routes[("POST", "/v1/templates/tpl-1/render-previews")] = (
            200,
            {"pngPreview": {"jobId": "png-1"}, "pdfPreview": {"jobId": "pdf-1"}},
        )

        response = await gateway.generate_template_previews(
            "tpl-1", GenerateTemplatePreviewsRequest(type="react", data={"a": 1})
        )

        assert service.last_body == {"type": "react", "data": {"a": 1}}
        assert response.png_preview.job_id == "png-1"
        assert response.pdf_preview.job_id == "pdf-1"

    @pytest.mark.asyncio
    async def test_save_created_template(self, gateway, service, metadata):
        request = SaveCreatedTemplateRequest(
            template_info=metadata,
            preview_ids=PreviewIds(png_job_id="png-1", pdf_job_id="pdf-1"),
        )

        await gateway.save_created_template("tpl-1", request)

        assert service.requests[0].method == "POST"
        assert service.requests[0].url.path == "/v1/templates/tpl-1"
        assert service.last_body == {
            "templateInfo": {
                "title": "T",
                "description": "D",
                "type": "react",
                "categories": ["invoice", "report"],
                "sampleData": {"a": 1},
                "sourceCode": "src",
            },
            "previewIds": {"pngJobId": "png-1", "pdfJobId": "pdf-1"},
        }

    @pytest.mark.asyncio
    async def test_update_template(self, gateway, service, metadata):
        request = UpdateTemplateRequest(
            template_info=metadata,
            preview_ids=PreviewIds(png_job_id="png-1", pdf_job_id="pdf-1"),
            content_id="tpl-10",
        )

        await gateway.update_template("tpl-9", request)

        assert service.requests[0].url.path == "/v1/templates/tpl-9/update"
        assert service.last_body["contentId"] == "tpl-10"


class TestDocumentEndpoints:
    """Render capability mapping."""

    @pytest.mark.asyncio
    async def test_initialize_render_job(self, gateway, service):
        service.routes[("POST", "/v1/documents/init")] = (
            200,
            {"jobId": "job-7", "presignedDataUploadUrl": "https://s3/data"},
        )

        response = await gateway.initialize_render_job(
            InitializeRenderJobRequest(type="html", target="pdf", template_id="tpl-1")
        )

        assert service.last_body == {"type": "html", "target": "pdf", "templateId": "tpl-1"}
        assert response.job_id == "job-7"
        assert response.presigned_data_upload_url == "https://s3/data"
        assert response.presigned_template_upload_url is None

    @pytest.mark.asyncio
    async def test_start_render_job(self, gateway, service):
        service.routes[("POST", "/v1/documents/job-7/render")] = (200, {"jobId": "job-7"})

        response = await gateway.start_render_job(
            "job-7", StartRenderJobRequest(should_wait_for_render_completion=False)
        )

        assert service.last_body == {"shouldWaitForRenderCompletion": False}
        assert response.job_id == "job-7"

    @pytest.mark.asyncio
    async def test_start_immediate_render(self, gateway, service):
        service.routes[("POST", "/v1/documents/immediate-render")] = (
            200,
            {"url": "https://cdn/out.pdf"},
        )

        response = await gateway.start_immediate_render(
            StartImmediateRenderRequest(
                type="html", target="pdf", template="<p>hi</p>", data={"name": "John Doe"}
            )
        )

        assert service.last_body == {
            "type": "html",
            "target": "pdf",
            "template": "<p>hi</p>",
            "data": {"name": "John Doe"},
        }
        assert response.url == "https://cdn/out.pdf"

    @pytest.mark.asyncio
    async def test_get_job_status(self, gateway, service):
        service.routes[("GET", "/v1/jobs/job-7")] = (
            200,
            {
                "jobId": "job-7",
                "status": "done",
                "output": {"data": {"url": "https://cdn/out.pdf"}, "metadata": {"pages": 1}},
                "type": "html",
            },
        )

        status = await gateway.get_job_status("job-7")

        assert status.is_done
        assert status.output.data.url == "https://cdn/out.pdf"
        assert status.model_extra["type"] == "html"


class TestErrors:
    """Error translation."""

    @pytest.mark.asyncio
    async def test_error_status_raises_service_error(self, gateway, service):
        service.routes[("GET", "/v1/jobs/job-7")] = (404, {"message": "job not found"})

        with pytest.raises(ServiceError) as exc_info:
            await gateway.get_job_status("job-7")

        assert exc_info.value.status_code == 404
        assert "job not found" in exc_info.value.response_body
        assert "404" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_transport_error_raises_service_error(self):
        def handler(request):
            raise httpx.ConnectError("Connection refused", request=request)

        client = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))
        gateway = HttpServiceGateway(client)

        with pytest.raises(ServiceError) as exc_info:
            await gateway.init_template_creation()

        assert exc_info.value.status_code is None
        assert "Connection refused" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_unexpected_body_raises_service_error(self, gateway, service):
        service.routes[("GET", "/v1/templates/init")] = (200, {"unexpected": True})

        with pytest.raises(ServiceError, match="unexpected body"):
            await gateway.init_template_creation()
