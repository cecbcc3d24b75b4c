"""Open Estimation Use Case - loads a stored estimation for editing."""

from dataclasses import dataclass

from salesdesk.application.dto.responses import EstimationTotalsResponse, OpenEstimationResponse
from salesdesk.config import estimation_context, get_logger
from salesdesk.core.entities.estimation import DocumentTotals
from salesdesk.core.exceptions import EstimationNotFoundError
from salesdesk.core.interfaces.estimation_store import IEstimationStore
from salesdesk.core.services.aggregator import DocumentAggregator
from salesdesk.core.services.composer import LineItemComposer
from salesdesk.core.services.estimation_mapper import EstimationMapper

logger = get_logger(__name__)


@dataclass
class OpenEstimationResult:
    """Result of opening an estimation."""

    composer: LineItemComposer
    totals: DocumentTotals


def _totals_response(totals: DocumentTotals) -> EstimationTotalsResponse:
    return EstimationTotalsResponse(**DocumentAggregator().rounded(totals).model_dump())


class OpenEstimationUseCase:
    """
    Load a persisted estimation into a composer.

    Flow:
    1. Fetch the stored record from the estimation store
    2. Map it into a composed document (line totals recomputed)
    3. Re-derive the document totals
    """

    def __init__(
        self,
        store: IEstimationStore,
        mapper: EstimationMapper | None = None,
    ):
        self._store = store
        self._mapper = mapper or EstimationMapper()

    async def execute(self, estimation_id: int) -> OpenEstimationResult:
        """
        Open the estimation for editing.

        Raises:
            EstimationNotFoundError: If the store has no such estimation.
        """
        with estimation_context(estimation_id=estimation_id):
            logger.info("open_estimation_started")

            record = await self._store.get_estimation(estimation_id)
            if record is None:
                raise EstimationNotFoundError(estimation_id)

            doc = self._mapper.from_persisted(record)
            if doc.estimation_id is None:
                doc.estimation_id = estimation_id

            composer = LineItemComposer(
                doc, codes=self._mapper.codes, pricing=self._mapper.pricing
            )
            totals = self._mapper.aggregator.compute_totals(doc)

            logger.info(
                "open_estimation_complete",
                line_items=len(doc.line_items),
                grand_total=totals.grand_total,
            )
        return OpenEstimationResult(composer=composer, totals=totals)

    @staticmethod
    def to_response(result: OpenEstimationResult) -> OpenEstimationResponse:
        """Convert result to response DTO."""
        doc = result.composer.document
        return OpenEstimationResponse(
            estimation_id=doc.estimation_id,
            lead_id=doc.lead_id,
            reference_number=doc.reference_number,
            document_type=doc.template_type.document_type,
            line_item_count=len(doc.line_items),
            totals=_totals_response(result.totals),
            stored_totals=_totals_response(doc.stored_totals) if doc.stored_totals else None,
        )
