from pydantic import BaseModel, Field


class SetDailyWordRequest(BaseModel):
    lexeme_id: int = Field(..., alias="lexemeId")

    model_config = {
        'populate_by_name': True
    }


class AdminCheckOut(BaseModel):
    isAdmin: bool
