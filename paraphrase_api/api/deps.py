from fastapi import Depends, Request

from paraphrase_api.services.generation import GenerationClient
from paraphrase_api.services.paraphraser import ParaphraseService


def get_generation_client(request: Request) -> GenerationClient:
    return request.app.state.generation_client


def get_paraphrase_service(generator: GenerationClient = Depends(get_generation_client)) -> ParaphraseService:
    return ParaphraseService(generator)
