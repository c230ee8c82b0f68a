"""ProcessingController: the staged state machine that drives minutes generation.

Flow:
    idle ──▶ uploading (20%) ──▶ extracting (60%) ──▶ generating (100%) ──▶ editing
              │                    │                    │
              └──────── failure ───┴────────────────────┴──▶ idle

The generator call inside `extracting` is the only await in a run. Runs are
single-flight: a request arriving while one is active is rejected.
"""
import logging
from typing import Dict, FrozenSet, Optional

from models.generation_request import GenerationRequest
from models.minutes import MinutesDocument
from models.processing import ProcessingStage, ProcessingStatus
from services.errors import (
    GenerationError,
    InvalidTransitionError,
    ProcessingInProgressError,
)
from services.minutes_editor import MinutesEditor
from services.minutes_generator import MinutesGenerator

logger = logging.getLogger(__name__)


ALLOWED_TRANSITIONS: Dict[ProcessingStage, FrozenSet[ProcessingStage]] = {
    ProcessingStage.idle: frozenset({ProcessingStage.uploading}),
    ProcessingStage.uploading: frozenset({ProcessingStage.extracting, ProcessingStage.idle}),
    ProcessingStage.extracting: frozenset({ProcessingStage.generating, ProcessingStage.idle}),
    ProcessingStage.generating: frozenset({ProcessingStage.editing, ProcessingStage.idle}),
    ProcessingStage.editing: frozenset({ProcessingStage.uploading, ProcessingStage.idle}),
}

STAGE_PROGRESS: Dict[ProcessingStage, int] = {
    ProcessingStage.idle: 0,
    ProcessingStage.uploading: 20,
    ProcessingStage.extracting: 60,
    ProcessingStage.generating: 100,
    ProcessingStage.editing: 100,
}

STAGE_LABELS: Dict[ProcessingStage, str] = {
    ProcessingStage.uploading: "upload",
    ProcessingStage.extracting: "extraction",
    ProcessingStage.generating: "generation",
}

ACTIVE_STAGES = frozenset({
    ProcessingStage.uploading,
    ProcessingStage.extracting,
    ProcessingStage.generating,
})


class ProcessingController:
    """Runs the upload -> extraction -> generation sequence for one workspace."""

    def __init__(self, generator: MinutesGenerator):
        self.generator = generator
        self.stage = ProcessingStage.idle
        self.failure_reason: Optional[str] = None
        self.last_error: Optional[GenerationError] = None
        self.editor: Optional[MinutesEditor] = None

    @property
    def progress(self) -> int:
        return STAGE_PROGRESS[self.stage]

    @property
    def current_step(self) -> Optional[str]:
        return STAGE_LABELS.get(self.stage)

    @property
    def is_processing(self) -> bool:
        return self.stage in ACTIVE_STAGES

    def status(self) -> ProcessingStatus:
        return ProcessingStatus(
            stage=self.stage,
            current_step=self.current_step,
            progress=self.progress,
            is_processing=self.is_processing,
            failure_reason=self.failure_reason,
            has_document=self.editor is not None,
        )

    def _transition(self, target: ProcessingStage) -> None:
        if target not in ALLOWED_TRANSITIONS[self.stage]:
            raise InvalidTransitionError(
                f"Cannot move from {self.stage.value} to {target.value}"
            )
        logger.info(
            f"Processing stage: {self.stage.value} -> {target.value}, "
            f"progress={STAGE_PROGRESS[target]}"
        )
        self.stage = target

    async def process(
        self,
        request: GenerationRequest,
        api_key: Optional[str] = None,
    ) -> ProcessingStatus:
        """Run the pipeline for one transcript.

        Generation failures do not propagate: the controller returns to idle
        and records the reason in the returned status.

        Raises:
            ProcessingInProgressError: If a run is already active.
        """
        if self.is_processing:
            logger.warning(f"Generation rejected, run in progress: stage={self.stage.value}")
            raise ProcessingInProgressError(
                f"A transcript is already being processed (stage={self.stage.value})"
            )

        # Starting over from editing drops the previous document.
        self.editor = None
        self.failure_reason = None
        self.last_error = None

        self._transition(ProcessingStage.uploading)
        logger.info(
            f"Transcript accepted: length={len(request.transcript_text)} chars, "
            f"title={request.meeting_title!r}, date={request.meeting_date!r}"
        )

        try:
            self._transition(ProcessingStage.extracting)
            document = await self.generator.generate(
                request.transcript_text,
                meeting_title=request.meeting_title,
                meeting_date=request.meeting_date,
                api_key=api_key,
            )
        except GenerationError as e:
            logger.error(
                f"Minutes generation failed: error={type(e).__name__}: {e}"
            )
            self._fail(e)
            return self.status()
        except Exception as e:
            logger.error(f"Unexpected failure during generation: error={e}", exc_info=True)
            self._transition(ProcessingStage.idle)
            self.failure_reason = f"Unexpected error: {e}"
            raise

        self._transition(ProcessingStage.generating)
        self._finish(document)
        return self.status()

    def _fail(self, error: GenerationError) -> None:
        self._transition(ProcessingStage.idle)
        self.failure_reason = str(error)
        self.last_error = error
        self.editor = None

    def _finish(self, document: MinutesDocument) -> None:
        self._transition(ProcessingStage.editing)
        self.editor = MinutesEditor(document)
        logger.info(f"Minutes ready for editing: title={document.meeting_title!r}")

    def reset(self) -> ProcessingStatus:
        """Start over: back to idle with no document and no error.

        Raises:
            ProcessingInProgressError: If a run is active.
        """
        if self.is_processing:
            raise ProcessingInProgressError(
                f"Cannot reset while processing (stage={self.stage.value})"
            )
        if self.stage != ProcessingStage.idle:
            self._transition(ProcessingStage.idle)
        self.editor = None
        self.failure_reason = None
        self.last_error = None
        return self.status()
