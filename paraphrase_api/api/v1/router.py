from fastapi import APIRouter

from paraphrase_api.api.v1 import paraphrase

router = APIRouter()
router.include_router(paraphrase.router, tags=["paraphrase"])
