"""Import all models so Alembic can discover them via Base.metadata."""
from tradielink.infrastructure.db.models.closure import ThreadClosureModel
from tradielink.infrastructure.db.models.message import MessageModel
from tradielink.infrastructure.db.models.read_cursor import ReadCursorModel
from tradielink.infrastructure.db.models.thread import ThreadModel
from tradielink.infrastructure.db.models.typing_intent import TypingIntentModel
from tradielink.infrastructure.db.models.user import UserModel

__all__ = [
    "MessageModel",
    "ReadCursorModel",
    "ThreadClosureModel",
    "ThreadModel",
    "TypingIntentModel",
    "UserModel",
]
