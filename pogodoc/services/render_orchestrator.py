"""
Render job workflows.

Two-phase asynchronous renders (reserve, upload inputs, start, poll) and
synchronous immediate renders.
"""

import asyncio
import logging
from typing import Optional

from pydantic_core import PydanticSerializationError, to_json

from ..exceptions import InvalidArgumentError, JobNotCompletedError
from ..models import (
    FilePayload,
    InitializeRenderJobRequest,
    JobStatus,
    JobStatusResponse,
    RenderSpec,
    StartImmediateRenderRequest,
    StartImmediateRenderResponse,
    StartRenderJobRequest,
    StartRenderJobResponse,
)
from .cancellation import pause, run_cancellable, workflow_step
from .gateway import ServiceGateway
from .object_uploader import HTML_CONTENT_TYPE, JSON_CONTENT_TYPE, ObjectUploader

logger = logging.getLogger(__name__)

INITIAL_POLL_DELAY = 1.0
POLL_INTERVAL = 0.5
MAX_POLL_ATTEMPTS = 60


def encode_render_data(data) -> FilePayload:
    """
    Serialize render data to a JSON upload body.

    Uses pydantic's JSON encoder so dates, UUIDs, decimals and models
    come out the same as in the immediate render request body.

    Raises:
        InvalidArgumentError: If data holds a value with no JSON form
    """
    try:
        return FilePayload(to_json(data))
    except PydanticSerializationError as e:
        raise InvalidArgumentError(
            f"render data is not JSON serializable: {e}",
            details={"type": type(data).__name__},
        ) from e


class RenderOrchestrator:
    """
    Drives render jobs to completion.

    Polling is fixed-interval: one initial delay, then up to
    max_attempts status queries separated by poll_interval seconds.
    """

    def __init__(
        self,
        gateway: ServiceGateway,
        uploader: ObjectUploader,
        initial_delay: float = INITIAL_POLL_DELAY,
        poll_interval: float = POLL_INTERVAL,
        max_attempts: int = MAX_POLL_ATTEMPTS,
    ):
        self._gateway = gateway
        self._uploader = uploader
        self.initial_delay = initial_delay
        self.poll_interval = poll_interval
        self.max_attempts = max_attempts

    async def start_generate(
        self,
        spec: RenderSpec,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> StartRenderJobResponse:
        """
        Reserve a render job, upload its inputs and start it.

        The data upload is skipped when the service returns no data URL,
        and the inline template upload when there is no inline template
        or no template URL.

        Returns:
            StartRenderJobResponse: Carries the job id; the job is not yet done
        """
        step = "initializing render job"
        with workflow_step(step, cancel_event):
            reservation = await run_cancellable(
                self._gateway.initialize_render_job(
                    InitializeRenderJobRequest.from_spec(spec)
                ),
                cancel_event,
                step,
            )
        job_id = reservation.job_id
        logger.info(f"Reserved render job {job_id} ({spec.type.value} -> {spec.target.value})")

        if reservation.presigned_data_upload_url:
            step = "uploading render data"
            with workflow_step(step, cancel_event):
                await run_cancellable(
                    self._uploader.upload(
                        reservation.presigned_data_upload_url,
                        encode_render_data(spec.data),
                        JSON_CONTENT_TYPE,
                    ),
                    cancel_event,
                    step,
                )
        elif spec.data is not None:
            logger.warning(f"No data upload URL for job {job_id}; render data not uploaded")

        if spec.template and reservation.presigned_template_upload_url:
            step = "uploading inline template"
            with workflow_step(step, cancel_event):
                await run_cancellable(
                    self._uploader.upload(
                        reservation.presigned_template_upload_url,
                        FilePayload.from_text(spec.template),
                        HTML_CONTENT_TYPE,
                    ),
                    cancel_event,
                    step,
                )

        step = "starting render job"
        with workflow_step(step, cancel_event):
            started = await run_cancellable(
                self._gateway.start_render_job(
                    job_id,
                    StartRenderJobRequest(
                        should_wait_for_render_completion=spec.should_wait_for_render_completion
                    ),
                ),
                cancel_event,
                step,
            )

        logger.info(f"Started render job {started.job_id}")
        return started

    async def generate(
        self,
        spec: RenderSpec,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> JobStatusResponse:
        """Start a render job and poll it until it is done."""
        with workflow_step("starting document generation"):
            started = await self.start_generate(spec, cancel_event)
        return await self.poll_for_completion(started.job_id, cancel_event)

    async def generate_immediate(
        self,
        spec: RenderSpec,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> StartImmediateRenderResponse:
        """Render synchronously in a single call. No uploads, no polling."""
        step = "rendering document immediately"
        with workflow_step(step, cancel_event):
            result = await run_cancellable(
                self._gateway.start_immediate_render(
                    StartImmediateRenderRequest.from_spec(spec)
                ),
                cancel_event,
                step,
            )
        logger.info(f"Immediate render finished: {spec.type.value} -> {spec.target.value}")
        return result

    async def poll_for_completion(
        self,
        job_id: str,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> JobStatusResponse:
        """
        Poll the job status until it reports done.

        Any status other than "done" keeps the loop going, "failed"
        included.

        Raises:
            JobNotCompletedError: If the job is not done after max_attempts queries
            OperationCancelledError: If cancel_event fires while polling
        """
        step = "waiting for render job"
        await pause(self.initial_delay, cancel_event, step)

        for attempt in range(1, self.max_attempts + 1):
            step = "getting job status"
            with workflow_step(step, cancel_event):
                status = await run_cancellable(
                    self._gateway.get_job_status(job_id), cancel_event, step
                )

            if status.is_done:
                logger.info(f"Render job {job_id} done after {attempt} status checks")
                return status

            if status.status == JobStatus.FAILED.value:
                logger.warning(f"Render job {job_id} reported failed; still polling")
            else:
                logger.debug(f"Render job {job_id} status: {status.status} (check {attempt})")

            await pause(
                self.poll_interval, cancel_event, "waiting for render job"
            )

        logger.error(f"Render job {job_id} not done after {self.max_attempts} status checks")
        raise JobNotCompletedError(job_id, self.max_attempts)
