"""
HTTP Service Gateway

Thin httpx wrapper around the Pogodoc REST API.
Handles request building, response parsing and error handling.
"""

import logging
from typing import Any, Dict, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ..exceptions import ServiceError
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
from .gateway import ServiceGateway

logger = logging.getLogger(__name__)

ResponseModel = TypeVar("ResponseModel", bound=BaseModel)


def _to_body(model: BaseModel) -> Dict[str, Any]:
    return model.model_dump(by_alias=True, exclude_none=True, mode="json")


class HttpServiceGateway(ServiceGateway):
    """
    ServiceGateway backed by the Pogodoc REST API.

    The http client must be configured with the API base URL and the
    bearer token (see PogodocClient). Each method issues exactly one
    request.
    """

    def __init__(self, http_client: httpx.AsyncClient):
        self._http_client = http_client

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[BaseModel] = None,
    ) -> httpx.Response:
        """
        Send a request and return the successful response.

        Raises:
            ServiceError: On transport failure or non-2xx status
        """
        try:
            response = await self._http_client.request(
                method,
                path,
                json=_to_body(body) if body is not None else None,
            )
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            error_body = e.response.text or None
            logger.error(f"Pogodoc {method} {path} failed with {status_code}")
            if error_body:
                logger.error(f"Response body: {error_body}")
            raise ServiceError(
                f"{method} {path} returned {status_code}",
                status_code=status_code,
                response_body=error_body,
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Pogodoc {method} {path} failed: {e}")
            raise ServiceError(f"{method} {path} failed: {e}") from e

    async def _request_model(
        self,
        response_model: Type[ResponseModel],
        method: str,
        path: str,
        body: Optional[BaseModel] = None,
    ) -> ResponseModel:
        """Send a request and parse its JSON body into response_model."""
        response = await self._request(method, path, body)
        try:
            return response_model.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(f"Unexpected response from {method} {path}: {e}")
            raise ServiceError(
                f"{method} {path} returned an unexpected body",
                status_code=response.status_code,
                response_body=response.text,
            ) from e

    async def init_template_creation(self) -> InitTemplateCreationResponse:
        return await self._request_model(
            InitTemplateCreationResponse, "GET", "/templates/init"
        )

    async def extract_template_files(self, template_id: str) -> None:
        await self._request("PATCH", f"/templates/{template_id}/unzip")

    async def generate_template_previews(
        self, template_id: str, request: GenerateTemplatePreviewsRequest
    ) -> GenerateTemplatePreviewsResponse:
        return await self._request_model(
            GenerateTemplatePreviewsResponse,
            "POST",
            f"/templates/{template_id}/render-previews",
            request,
        )

    async def save_created_template(
        self, template_id: str, request: SaveCreatedTemplateRequest
    ) -> None:
        await self._request("POST", f"/templates/{template_id}", request)

    async def update_template(
        self, template_id: str, request: UpdateTemplateRequest
    ) -> None:
        await self._request("POST", f"/templates/{template_id}/update", request)

    async def initialize_render_job(
        self, request: InitializeRenderJobRequest
    ) -> InitializeRenderJobResponse:
        return await self._request_model(
            InitializeRenderJobResponse, "POST", "/documents/init", request
        )

    async def start_render_job(
        self, job_id: str, request: StartRenderJobRequest
    ) -> StartRenderJobResponse:
        return await self._request_model(
            StartRenderJobResponse, "POST", f"/documents/{job_id}/render", request
        )

    async def start_immediate_render(
        self, request: StartImmediateRenderRequest
    ) -> StartImmediateRenderResponse:
        return await self._request_model(
            StartImmediateRenderResponse,
            "POST",
            "/documents/immediate-render",
            request,
        )

    async def get_job_status(self, job_id: str) -> JobStatusResponse:
        return await self._request_model(JobStatusResponse, "GET", f"/jobs/{job_id}")
