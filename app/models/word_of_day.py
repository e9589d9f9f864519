from sqlalchemy import Column, Integer, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime, UTC

from app.db import Base

STATE_ROW_ID = 1


class WordOfDayState(Base):
    """Singleton row (id=1) pointing at the current word of the day."""
    __tablename__ = "word_of_day_state"

    id = Column(Integer, primary_key=True, default=STATE_ROW_ID)
    lexeme_id = Column(Integer, ForeignKey("lexemes.id"), nullable=False)
    selected_at = Column(DateTime, nullable=False)

    lexeme = relationship("Lexeme")


class WordOfDayLog(Base):
    """Every lexeme ever selected; cleared in full once all have been used."""
    __tablename__ = "word_of_day_log"

    lexeme_id = Column(Integer, ForeignKey("lexemes.id"), primary_key=True)
    used_at = Column(DateTime, default=lambda: datetime.now(UTC).replace(tzinfo=None))
