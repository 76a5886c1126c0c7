from logging import getLogger

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..models import Suggestion
from ..schemas import SuggestionCreate, SuggestionOut

logger = getLogger(__name__)

router = APIRouter(prefix="/api/suggestions", tags=["suggestions"])


@router.post("", response_model=SuggestionOut, status_code=status.HTTP_201_CREATED)
async def create_suggestion(payload: SuggestionCreate, db: AsyncSession = Depends(get_db)) -> SuggestionOut:
	suggestion = Suggestion(**payload.model_dump())
	db.add(suggestion)
	await db.commit()
	await db.refresh(suggestion)
	logger.info("Suggestion %s received", suggestion.id)
	return SuggestionOut.model_validate(suggestion)
