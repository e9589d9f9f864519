from pydantic import BaseModel, Field
from typing import Optional


class FlashcardReview(BaseModel):
    user_id: str = Field(..., alias="userId", min_length=1)
    baby_name_id: int = Field(..., alias="babyNameId")
    confidence_level: Optional[int] = Field(None, alias="confidenceLevel", ge=0, le=5)

    model_config = {
        'populate_by_name': True
    }


class QuizAttemptCreate(BaseModel):
    user_id: str = Field(..., alias="userId", min_length=1)
    baby_name_id: int = Field(..., alias="babyNameId")
    correct: bool
    difficulty: Optional[str] = None
    response_time_ms: Optional[int] = Field(None, alias="responseTimeMs", ge=0)

    model_config = {
        'populate_by_name': True
    }
