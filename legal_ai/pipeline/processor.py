from legal_ai.logging.logger import Log
from legal_ai.pipeline.pipeline import PipelineContext, PipelineState, PipelineStep


class Processor:
    """Runs pipeline steps in order; on any error runs the failure step and re-raises."""

    def __init__(
        self,
        steps: list[PipelineStep],
        failed_step: PipelineStep | None = None,
    ) -> None:
        self._steps = steps
        self._failed_step = failed_step

    def process(self, context: PipelineContext) -> PipelineContext:
        Log.info(f"Processing {context.request.analysis_type} for {context.document_label}")
        try:
            for step in self._steps:
                context = step.run(context)
        except Exception as exc:
            failed_in = context.state
            context.state = PipelineState.FAILED
            context.error_message = str(exc)
            self._run_failed_step(context)
            Log.warning(f"Pipeline failed during {failed_in.value}: {exc}")
            raise
        context.state = PipelineState.DONE
        return context

    def _run_failed_step(self, context: PipelineContext) -> None:
        if self._failed_step is None:
            return
        try:
            self._failed_step.run(context)
        except Exception as exc:
            # The original error is what the caller needs to see.
            Log.error(f"Could not record failure for {context.document_label}: {exc}")
