import logging
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import text as sa_text

logger = logging.getLogger(__name__)

db = SQLAlchemy()


class Prompt(db.Model):
    __tablename__ = "prompts"
    # AUTOINCREMENT: ids are never reused
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    prompt = db.Column(db.Text, nullable=False)
    timestamp = db.Column(db.DateTime, server_default=db.func.current_timestamp())
    completed = db.Column(db.Boolean, nullable=False, default=False, server_default=sa_text("0"))

    def __repr__(self):
        return f"<Prompt {self.id} completed={self.completed}>"


class WritingSession(db.Model):
    """One logged word-count sample."""
    __tablename__ = "WritingSession"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    wordcount = db.Column(db.Integer, nullable=False)
    timestamp = db.Column(db.DateTime, server_default=db.func.current_timestamp())

    def __repr__(self):
        return f"<WritingSession {self.id} {self.wordcount} words>"


# ── Queries ───────────────────────────────────────────────────────────────────

def _commit():
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise


def add_prompt(text: str) -> Prompt:
    prompt = Prompt(prompt=text)
    db.session.add(prompt)
    _commit()
    logger.info("Added prompt %s", prompt.id)
    return prompt


def list_prompts(completed: bool) -> list:
    """Prompts with the given completion flag, oldest first."""
    return (Prompt.query
            .filter_by(completed=completed)
            .order_by(Prompt.id.asc())
            .all())


def set_completed(prompt_id: int) -> int:
    """Flag a prompt as completed; returns rows affected (0 for an unknown id)."""
    updated = Prompt.query.filter_by(id=prompt_id).update(
        {"completed": True}, synchronize_session=False
    )
    _commit()
    logger.info("Marked prompt %s completed (%d row(s))", prompt_id, updated)
    return updated


def add_word_count(wordcount: int) -> WritingSession:
    sample = WritingSession(wordcount=wordcount)
    db.session.add(sample)
    _commit()
    logger.info("Logged %d words as session %s", wordcount, sample.id)
    return sample


def list_word_counts() -> list:
    return WritingSession.query.order_by(WritingSession.id.asc()).all()
