"""HTTP routes triggering the analysis stages."""

from __future__ import annotations

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Request
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from post_analysis.common.errors import PublishError
from post_analysis.models import EventType, PubSubEvent, SNSEnvelope
from post_analysis.processor import AnalysisProcessor, Stage

router = APIRouter(prefix="/api")
logger = logging.getLogger(__name__)

# Non-GET requests are answered with 400 rather than 405
ANALYZE_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]


def get_processor(request: Request) -> AnalysisProcessor:
    return request.app.state.processor


def _schedule(
    stage: Stage,
    request: Request,
    filename: str | None,
    background_tasks: BackgroundTasks,
    processor: AnalysisProcessor,
) -> PlainTextResponse:
    if request.method != "GET":
        return PlainTextResponse("must be GET request", status_code=400)

    # this file must live within the storage bucket
    if not filename:
        return PlainTextResponse("missing required input filename", status_code=400)

    logger.info(f"Received {stage.value} analysis request for \"{filename}\"")
    background_tasks.add_task(processor.run, stage, filename)
    return PlainTextResponse(f'analyzing "{filename}"')


@router.api_route("/analyze/posts", methods=ANALYZE_METHODS)
async def analyze_posts(
    request: Request,
    background_tasks: BackgroundTasks,
    filename: str | None = None,
    processor: AnalysisProcessor = Depends(get_processor),
) -> PlainTextResponse:
    """Analyze entities and sentiment of a posts file in one pass."""
    return _schedule(Stage.POSTS, request, filename, background_tasks, processor)


@router.api_route("/analyze/entity", methods=ANALYZE_METHODS)
async def analyze_entity(
    request: Request,
    background_tasks: BackgroundTasks,
    filename: str | None = None,
    processor: AnalysisProcessor = Depends(get_processor),
) -> PlainTextResponse:
    """Count entities, then trigger the sentiment stage via the topic."""
    return _schedule(Stage.ENTITY, request, filename, background_tasks, processor)


@router.api_route("/analyze/sentiment", methods=ANALYZE_METHODS)
async def analyze_sentiment(
    request: Request,
    background_tasks: BackgroundTasks,
    filename: str | None = None,
    processor: AnalysisProcessor = Depends(get_processor),
) -> PlainTextResponse:
    """Score the sentiment of a posts file."""
    return _schedule(Stage.SENTIMENT, request, filename, background_tasks, processor)


@router.post("/events")
async def receive_event(
    request: Request,
    background_tasks: BackgroundTasks,
    processor: AnalysisProcessor = Depends(get_processor),
) -> PlainTextResponse:
    """SNS HTTP subscription endpoint."""
    try:
        envelope = SNSEnvelope.model_validate_json(await request.body())
    except ValidationError as e:
        logger.warning(f"Rejected malformed notification: {e}")
        return PlainTextResponse("malformed notification", status_code=400)

    if envelope.type == "SubscriptionConfirmation":
        if not envelope.token:
            return PlainTextResponse("missing subscription token", status_code=400)
        try:
            await processor.publisher.confirm_subscription(envelope.token, envelope.topic_arn)
        except PublishError as e:
            logger.error(f"failed to confirm subscription: {e}")
            return PlainTextResponse("subscription confirmation failed", status_code=502)
        return PlainTextResponse("subscription confirmed")

    if envelope.type != "Notification":
        logger.info(f"Ignoring {envelope.type} message")
        return PlainTextResponse("ignored")

    try:
        event = PubSubEvent.model_validate_json(envelope.message)
    except ValidationError as e:
        logger.warning(f"Rejected malformed event: {e}")
        return PlainTextResponse("malformed event", status_code=400)

    if event.event_type != EventType.UPDATE_POST_SENTIMENT.value:
        logger.info(f"Ignoring {event.event_type} event")
        return PlainTextResponse("ignored")

    if not event.payload:
        return PlainTextResponse("missing required input filename", status_code=400)

    background_tasks.add_task(processor.run, Stage.SENTIMENT, event.payload)
    return PlainTextResponse(f'analyzing "{event.payload}"')
