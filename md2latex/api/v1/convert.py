import logging

from fastapi import APIRouter

from md2latex.api.schemas.schemas import ConvertRequest, ConvertResponse
from md2latex.core.converter import preprocess
from md2latex.services.conversion_service import convert_text

logger = logging.getLogger(__name__)

router = APIRouter(tags=["convert"])


@router.post("/convert", response_model=ConvertResponse)
async def convert_markdown(data: ConvertRequest):
    latex = convert_text(data.markdown)
    preprocessed = preprocess(data.markdown) if data.include_preprocessed else None
    return ConvertResponse(latex=latex, preprocessed=preprocessed)
