from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from paraphrase_api.api.deps import get_paraphrase_service
from paraphrase_api.schemas.common import ErrorResponse
from paraphrase_api.schemas.paraphrase import RewriteResult, Tone, ToneListResponse
from paraphrase_api.services.paraphraser import ParaphraseService, parse_rewrite_request
from paraphrase_api.utils.request_body import read_json_body

router = APIRouter()


@router.post(
    "/paraphrase",
    response_model=RewriteResult,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def paraphrase_text(
    request: Request,
    service: ParaphraseService = Depends(get_paraphrase_service),
):
    payload = await read_json_body(request)
    rewrite_request = parse_rewrite_request(payload)
    return await service.paraphrase(rewrite_request)


@router.get("/tones", response_model=ToneListResponse)
async def list_tones() -> ToneListResponse:
    return ToneListResponse(tones=list(Tone))
