"""
Pogodoc client and its factory methods.

PogodocClient wires the HTTP gateway, the object uploader and the
orchestrators together and exposes the public workflow surface.
"""

import asyncio
import logging
from typing import Optional

import httpx

from .config import (
    DEFAULT_BASE_URL,
    DEFAULT_REQUEST_TIMEOUT,
    PogodocSettings,
    require_token,
    validate_base_url,
)
from .models import (
    FilePayload,
    JobStatusResponse,
    RenderSpec,
    StartImmediateRenderResponse,
    StartRenderJobResponse,
    TemplateMetadata,
)
from .services import (
    HttpServiceGateway,
    ObjectUploader,
    RenderOrchestrator,
    ServiceGateway,
    TemplateOrchestrator,
)
from .services.template_orchestrator import PathLike

logger = logging.getLogger(__name__)


class PogodocClient:
    """
    Client for the Pogodoc document generation service.

    Use one of the factory methods:
        - PogodocClient.from_env(): token and base URL from the environment
        - PogodocClient.with_config(base_url, token)
        - PogodocClient.with_token(token): default base URL

    Every workflow method accepts an optional asyncio.Event; setting it
    aborts the workflow with OperationCancelledError before the next
    request goes out.

    Usage:
        async with PogodocClient.from_env() as client:
            result = await client.generate_document(spec)
            print(result.output.data.url)
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        gateway: Optional[ServiceGateway] = None,
        upload_client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = validate_base_url(base_url)
        self._token = require_token(token)

        self._service_client: Optional[httpx.AsyncClient] = None
        if gateway is None:
            self._service_client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={
                    "Authorization": f"Bearer {self._token}",
                    "Accept": "application/json",
                },
                timeout=timeout,
            )
            gateway = HttpServiceGateway(self._service_client)

        # Pre-signed URLs must not receive the bearer token
        self._upload_client = upload_client or httpx.AsyncClient(timeout=timeout)

        self.gateway = gateway
        self.uploader = ObjectUploader(self._upload_client)
        self.templates = TemplateOrchestrator(self.gateway, self.uploader)
        self.renders = RenderOrchestrator(self.gateway, self.uploader)

        logger.info(f"Pogodoc client initialized for {self.base_url}")

    @classmethod
    def from_env(cls, settings: Optional[PogodocSettings] = None) -> "PogodocClient":
        """
        Build a client from POGODOC_API_TOKEN and POGODOC_BASE_URL.

        Raises:
            ConfigurationError: If POGODOC_API_TOKEN is missing or the base URL is malformed
        """
        settings = settings or PogodocSettings()
        token = require_token(settings.POGODOC_API_TOKEN)
        return cls(
            settings.POGODOC_BASE_URL or DEFAULT_BASE_URL,
            token,
            timeout=settings.POGODOC_REQUEST_TIMEOUT,
        )

    @classmethod
    def with_config(cls, base_url: str, token: str) -> "PogodocClient":
        """Build a client for an explicit base URL and token."""
        return cls(base_url, token)

    @classmethod
    def with_token(cls, token: str) -> "PogodocClient":
        """Build a client for the default base URL."""
        return cls(DEFAULT_BASE_URL, token)

    async def aclose(self) -> None:
        """Close the underlying HTTP connections."""
        if self._service_client is not None:
            await self._service_client.aclose()
        await self._upload_client.aclose()

    async def __aenter__(self) -> "PogodocClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def save_template(
        self,
        path: PathLike,
        metadata: TemplateMetadata,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> str:
        """Save a zipped template read from path. Returns the template id."""
        return await self.templates.save_template(path, metadata, cancel_event)

    async def save_template_from_stream(
        self,
        payload: FilePayload,
        metadata: TemplateMetadata,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> str:
        """Save a zipped template held in memory. Returns the template id."""
        return await self.templates.save_template_from_stream(
            payload, metadata, cancel_event
        )

    async def update_template(
        self,
        template_id: str,
        path: PathLike,
        metadata: TemplateMetadata,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> str:
        """Replace the content of template_id with the archive at path."""
        return await self.templates.update_template(
            template_id, path, metadata, cancel_event
        )

    async def update_template_from_stream(
        self,
        template_id: str,
        payload: FilePayload,
        metadata: TemplateMetadata,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> str:
        """Replace the content of template_id with an in-memory archive."""
        return await self.templates.update_template_from_stream(
            template_id, payload, metadata, cancel_event
        )

    async def start_generate_document(
        self,
        spec: RenderSpec,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> StartRenderJobResponse:
        """Start a render job without waiting for it to finish."""
        return await self.renders.start_generate(spec, cancel_event)

    async def generate_document(
        self,
        spec: RenderSpec,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> JobStatusResponse:
        """Start a render job and poll until it is done."""
        return await self.renders.generate(spec, cancel_event)

    async def generate_document_immediate(
        self,
        spec: RenderSpec,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> StartImmediateRenderResponse:
        """Render synchronously and return the output URL."""
        return await self.renders.generate_immediate(spec, cancel_event)

    async def poll_for_job_completion(
        self,
        job_id: str,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> JobStatusResponse:
        """Poll an already started render job until it is done."""
        return await self.renders.poll_for_completion(job_id, cancel_event)
