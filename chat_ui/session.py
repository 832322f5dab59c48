"""Client-side chat state.

``SessionContext`` holds the token and user returned by login; ``ChatSession``
is the state machine the UI drives:

    Unauthenticated --sign_in--> Authenticated(Idle)
    Idle --begin_question--> AwaitingResponse --resolve/rollback--> Idle
    Authenticated --logout--> Unauthenticated

At most one question is in flight at a time.
"""
import logging
import time
from dataclasses import dataclass, field, replace
from typing import Callable

from jose import JWTError, jwt

logger = logging.getLogger(__name__)

QUESTION = "question"
ANSWER = "answer"

ABSENT = "absent"
VALID = "valid"
EXPIRED = "expired"


@dataclass(frozen=True)
class Turn:
    role: str
    text: str
    pending: bool = False

    def to_dict(self) -> dict:
        return {"type": self.role, "content": self.text}

    @classmethod
    def from_dict(cls, d: dict) -> "Turn":
        return cls(role=d["type"], text=d["content"])


@dataclass
class SessionContext:
    token: str | None = None
    user: dict | None = None

    @property
    def status(self) -> str:
        if not self.token:
            return ABSENT
        # the client cannot check the signature, only the expiry it was given
        try:
            exp = jwt.get_unverified_claims(self.token).get("exp")
        except JWTError:
            return EXPIRED
        if exp is not None and exp <= time.time():
            return EXPIRED
        return VALID


@dataclass
class ChatSession:
    context: SessionContext = field(default_factory=SessionContext)
    transcript: list[Turn] = field(default_factory=list)
    awaiting_response: bool = False

    @property
    def authenticated(self) -> bool:
        return self.context.status == VALID

    def sign_in(self, token: str, user: dict):
        self.context = SessionContext(token=token, user=user)
        self.awaiting_response = False
        logger.info("signed in as %s", user.get("username"))

    def logout(self):
        # transcript is kept; only credentials are dropped
        self.context = SessionContext()
        self.rollback()

    def begin_question(self, text: str) -> Turn | None:
        """Append ``text`` as a pending question, or return None if it cannot be asked now."""
        if not self.authenticated or self.awaiting_response:
            return None
        if not text or not text.strip():
            return None

        turn = Turn(QUESTION, text, pending=True)
        self.transcript.append(turn)
        self.awaiting_response = True
        return turn

    def resolve(self, answer: str):
        if not self.awaiting_response:
            return
        idx = self._pending_index()
        if idx is not None:
            self.transcript[idx] = replace(self.transcript[idx], pending=False)
        self.transcript.append(Turn(ANSWER, answer))
        self.awaiting_response = False

    def rollback(self):
        idx = self._pending_index()
        if idx is not None:
            del self.transcript[idx]
        self.awaiting_response = False

    def ask(self, text: str, complete: Callable[[str], str]) -> str | None:
        """Run one question through ``complete`` and record both turns.

        Returns the answer, or None when the question was not accepted.
        """
        turn = self.begin_question(text)
        if turn is None:
            return None
        try:
            answer = complete(turn.text)
        except BaseException:
            # also covers interrupts that are not Exception subclasses
            self.rollback()
            raise
        self.resolve(answer)
        return answer

    def confirmed_turns(self) -> list[Turn]:
        return [t for t in self.transcript if not t.pending]

    def _pending_index(self) -> int | None:
        for i in range(len(self.transcript) - 1, -1, -1):
            if self.transcript[i].pending:
                return i
        return None
