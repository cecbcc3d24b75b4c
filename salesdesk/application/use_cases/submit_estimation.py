"""Submit Estimation Use Case - finalizes, renders and persists an estimation."""

from dataclasses import dataclass
from datetime import date

from salesdesk.application.dto.responses import EstimationSummaryResponse
from salesdesk.config import estimation_context, get_logger
from salesdesk.core.entities.estimation import DocumentMode, EstimationDocument
from salesdesk.core.entities.persisted import EstimationPayload
from salesdesk.core.entities.quotation import QuotationView
from salesdesk.core.exceptions import EstimationNotReadyError
from salesdesk.core.interfaces.estimation_store import IEstimationStore, IReferenceCounterStore
from salesdesk.core.interfaces.renderer import IQuotationRenderer
from salesdesk.core.services.composer import LineItemComposer
from salesdesk.core.services.estimation_mapper import EstimationMapper
from salesdesk.core.services.quotation_builder import QuotationBuilder
from salesdesk.core.services.reference_numbers import ReferenceCounter, next_reference_number

logger = get_logger(__name__)


@dataclass
class SubmitEstimationResult:
    """Result of submitting an estimation."""

    payload: EstimationPayload
    reference_number: str
    view: QuotationView
    document_bytes: bytes | None = None


class SubmitEstimationUseCase:
    """
    Submit the composer's document.

    Flow:
    1. Check pricing gate and section completeness
    2. Assign a reference number unless the document already has one
    3. Build the quotation view and render it (when a renderer is given)
    4. Build the payload and create or update it in the store
    """

    def __init__(
        self,
        store: IEstimationStore,
        counter_store: IReferenceCounterStore | None = None,
        renderer: IQuotationRenderer | None = None,
        mapper: EstimationMapper | None = None,
        builder: QuotationBuilder | None = None,
    ):
        self._store = store
        self._counter_store = counter_store
        self._renderer = renderer
        self._mapper = mapper or EstimationMapper()
        self._builder = builder or self._mapper.builder

    async def _assign_reference_number(self, today: date) -> str:
        counter = (
            await self._counter_store.load() if self._counter_store else ReferenceCounter()
        )
        reference_number, advanced = next_reference_number(
            counter,
            today,
            prefix=self._mapper.codes.reference_prefix,
            width=self._mapper.codes.code_width,
        )
        if self._counter_store:
            await self._counter_store.save(advanced)
        return reference_number

    async def execute(
        self, composer: LineItemComposer, today: date | None = None
    ) -> SubmitEstimationResult:
        """
        Execute the submission.

        Raises:
            EstimationNotReadyError: If the document fails the submission gate.
        """
        doc = composer.document
        with estimation_context(lead_id=doc.lead_id, estimation_id=doc.estimation_id):
            return await self._submit(doc, today or date.today())

    async def _submit(self, doc: EstimationDocument, today: date) -> SubmitEstimationResult:
        readiness = self._mapper.aggregator.submission_readiness(doc)
        if not readiness.ready:
            reasons = [r.value for r in readiness.reasons]
            logger.info("submit_estimation_blocked", reasons=reasons)
            raise EstimationNotReadyError(reasons)
        for warning in readiness.warnings:
            logger.warning(
                "rate_above_max_cost",
                line_item_id=warning.line_item_id,
                add_on_id=warning.add_on_id,
                rate=warning.rate,
                max_cost=warning.max_cost,
            )

        if not doc.reference_number:
            doc.reference_number = await self._assign_reference_number(today)

        logger.info(
            "submit_estimation_started",
            reference_number=doc.reference_number,
            mode=doc.mode.value,
        )

        totals = self._mapper.aggregator.compute_totals(doc)
        view = self._builder.build(doc, totals, today=today)

        document_bytes = self._renderer.render(view) if self._renderer else None

        payload = self._mapper.to_persisted(doc, totals, view=view, today=today)
        if doc.mode is DocumentMode.EDIT:
            await self._store.update_estimation(payload.estimation.lead_id, payload)
        else:
            await self._store.create_estimation(payload)

        logger.info(
            "submit_estimation_complete",
            reference_number=doc.reference_number,
            products=len(payload.products),
            grand_total=payload.estimation.grand_total,
        )
        return SubmitEstimationResult(
            payload=payload,
            reference_number=doc.reference_number,
            view=view,
            document_bytes=document_bytes,
        )

    @staticmethod
    def to_response(result: SubmitEstimationResult) -> EstimationSummaryResponse:
        """Convert result to response DTO."""
        header = result.payload.estimation
        return EstimationSummaryResponse(
            reference_number=result.reference_number,
            document_type=header.document_type,
            estimation_id=header.estimation_id,
            lead_id=header.lead_id,
            customer_name=header.customer_name,
            line_item_count=len(result.payload.products),
            grand_total=header.grand_total,
            document_size=len(result.document_bytes or b""),
        )
