"""
Template lifecycle workflows: save a new template, update an existing one.

Both workflows run the same staging steps (reserve, upload, extract,
preview) and differ only in the final persistence call. Each step is a
hard barrier; a failure aborts the workflow with a step-tagged error and
nothing is rolled back on the service side.
"""

import asyncio
import logging
import os
from typing import Optional, Tuple, Union

from ..models import (
    FilePayload,
    GenerateTemplatePreviewsRequest,
    PreviewIds,
    SaveCreatedTemplateRequest,
    TemplateMetadata,
    UpdateTemplateRequest,
)
from .cancellation import run_cancellable, workflow_step
from .file_loader import FileLoader
from .gateway import ServiceGateway
from .object_uploader import ZIP_CONTENT_TYPE, ObjectUploader

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


class TemplateOrchestrator:
    """Sequences template endpoints and archive uploads."""

    def __init__(self, gateway: ServiceGateway, uploader: ObjectUploader):
        self._gateway = gateway
        self._uploader = uploader

    async def save_template(
        self,
        path: PathLike,
        metadata: TemplateMetadata,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> str:
        """Load a zipped template from path and save it. Returns the new template id."""
        payload = self._load(path, cancel_event)
        return await self.save_template_from_stream(payload, metadata, cancel_event)

    async def save_template_from_stream(
        self,
        payload: FilePayload,
        metadata: TemplateMetadata,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> str:
        """
        Create a template from an in-memory zip archive.

        Args:
            payload: Zipped template archive
            metadata: Title, description, engine type, categories and sample data
            cancel_event: Set to abort before the next step

        Returns:
            str: Identifier of the saved template
        """
        template_id, preview_ids = await self._stage_content(
            payload, metadata, cancel_event
        )

        request = SaveCreatedTemplateRequest(
            template_info=metadata,
            preview_ids=preview_ids,
        )
        step = "saving created template"
        with workflow_step(step, cancel_event):
            await run_cancellable(
                self._gateway.save_created_template(template_id, request),
                cancel_event,
                step,
            )

        logger.info(f"Saved template {template_id} ({metadata.title})")
        return template_id

    async def update_template(
        self,
        template_id: str,
        path: PathLike,
        metadata: TemplateMetadata,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> str:
        """Load a zipped template from path and use it as new content for template_id."""
        payload = self._load(path, cancel_event)
        return await self.update_template_from_stream(
            template_id, payload, metadata, cancel_event
        )

    async def update_template_from_stream(
        self,
        template_id: str,
        payload: FilePayload,
        metadata: TemplateMetadata,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> str:
        """
        Replace the content and metadata of an existing template.

        The reservation step yields a fresh content id that carries the
        new archive; the update then points template_id at it.

        Returns:
            str: template_id, unchanged
        """
        content_id, preview_ids = await self._stage_content(
            payload, metadata, cancel_event
        )

        request = UpdateTemplateRequest(
            template_info=metadata,
            preview_ids=preview_ids,
            content_id=content_id,
        )
        step = "updating template"
        with workflow_step(step, cancel_event):
            await run_cancellable(
                self._gateway.update_template(template_id, request),
                cancel_event,
                step,
            )

        logger.info(f"Updated template {template_id} with content {content_id}")
        return template_id

    @staticmethod
    def _load(path: PathLike, cancel_event: Optional[asyncio.Event]) -> FilePayload:
        with workflow_step("reading template file", cancel_event):
            return FileLoader.load(path)

    async def _stage_content(
        self,
        payload: FilePayload,
        metadata: TemplateMetadata,
        cancel_event: Optional[asyncio.Event],
    ) -> Tuple[str, PreviewIds]:
        """Reserve an id, upload the archive, extract it and render previews."""
        step = "initializing template creation"
        with workflow_step(step, cancel_event):
            reservation = await run_cancellable(
                self._gateway.init_template_creation(), cancel_event, step
            )
        content_id = reservation.template_id
        logger.info(f"Reserved template content {content_id}")

        step = "uploading template"
        with workflow_step(step, cancel_event):
            await run_cancellable(
                self._uploader.upload(
                    reservation.presigned_template_upload_url,
                    payload,
                    ZIP_CONTENT_TYPE,
                ),
                cancel_event,
                step,
            )

        step = "extracting template files"
        with workflow_step(step, cancel_event):
            await run_cancellable(
                self._gateway.extract_template_files(content_id), cancel_event, step
            )

        step = "generating template previews"
        with workflow_step(step, cancel_event):
            previews = await run_cancellable(
                self._gateway.generate_template_previews(
                    content_id,
                    GenerateTemplatePreviewsRequest(
                        type=metadata.type, data=metadata.sample_data
                    ),
                ),
                cancel_event,
                step,
            )
        logger.debug(
            f"Previews for {content_id}: png={previews.png_preview.job_id}, "
            f"pdf={previews.pdf_preview.job_id}"
        )

        return content_id, PreviewIds.from_previews(previews)
