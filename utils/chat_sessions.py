from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional
import logging
import secrets
import time

CAREER_ADVISOR_INSTRUCTION = """You are a helpful career advisor and job search assistant. Answer questions directly and helpfully. Be specific and provide real, actionable advice based on the user's question. Don't just list your capabilities - actually answer their question.

IMPORTANT: Format your responses using Markdown for better readability:
- Use **bold** for important points
- Use bullet points (-) or numbered lists (1.) for lists
- Use headings (##) for sections
- Use code formatting (`code`) for technical terms
- Keep paragraphs short and well-spaced
- Make your responses easy to read and visually appealing"""

EXIT_COMMANDS = ("exit", "quit")


def new_session_id() -> str:
    return f"session_{int(time.time() * 1000)}_{secrets.token_hex(5)}"


def is_exit_command(message: str) -> bool:
    return (message or "").strip().lower() in EXIT_COMMANDS


@dataclass
class ChatSession:
    """Conversation history for one chat, sent with every model call"""

    session_id: str
    system_instruction: str = CAREER_ADVISOR_INSTRUCTION
    history: List[Dict[str, str]] = field(default_factory=list)
    created_at: float = field(default_factory=time.time)
    last_used: float = field(default_factory=time.time)

    def messages(self, pending: Optional[str] = None) -> List[Dict[str, str]]:
        messages = [{"role": "system", "content": self.system_instruction}]
        messages.extend(self.history)
        if pending is not None:
            messages.append({"role": "user", "content": pending})
        return messages

    def record_exchange(self, user_message: str, reply: str) -> None:
        self.history.append({"role": "user", "content": user_message})
        self.history.append({"role": "assistant", "content": reply})


class ChatSessionStore:
    """
    Process-local chat sessions with a size cap and idle expiry

    Least recently used sessions are evicted once max_sessions is reached;
    sessions idle for longer than ttl_seconds are dropped on access.
    """

    def __init__(self, max_sessions: int = 1000, ttl_seconds: int = 3600,
                 clock: Callable[[], float] = time.time):
        self.max_sessions = max(1, max_sessions)
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._sessions: "OrderedDict[str, ChatSession]" = OrderedDict()

    def __len__(self) -> int:
        self._purge_expired()
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return self.get(session_id) is not None

    def create(self, session_id: Optional[str] = None,
               system_instruction: str = CAREER_ADVISOR_INSTRUCTION) -> ChatSession:
        now = self._clock()
        session = ChatSession(
            session_id=session_id or new_session_id(),
            system_instruction=system_instruction,
            created_at=now,
            last_used=now,
        )
        self._sessions[session.session_id] = session
        self._sessions.move_to_end(session.session_id)
        self._evict_overflow()
        return session

    def get(self, session_id: Optional[str]) -> Optional[ChatSession]:
        if not session_id:
            return None
        session = self._sessions.get(session_id)
        if session is None:
            return None
        if self._is_expired(session):
            logging.info(f"Chat session {session_id} expired")
            del self._sessions[session_id]
            return None
        session.last_used = self._clock()
        self._sessions.move_to_end(session_id)
        return session

    def get_or_create(self, session_id: Optional[str]) -> ChatSession:
        return self.get(session_id) or self.create(session_id)

    def delete(self, session_id: Optional[str]) -> bool:
        if session_id and session_id in self._sessions:
            del self._sessions[session_id]
            return True
        return False

    def clear(self) -> None:
        self._sessions.clear()

    def _is_expired(self, session: ChatSession) -> bool:
        return self.ttl_seconds > 0 and self._clock() - session.last_used > self.ttl_seconds

    def _purge_expired(self) -> None:
        for session_id in [sid for sid, s in self._sessions.items() if self._is_expired(s)]:
            del self._sessions[session_id]

    def _evict_overflow(self) -> None:
        while len(self._sessions) > self.max_sessions:
            session_id, _ = self._sessions.popitem(last=False)
            logging.info(f"Evicted chat session {session_id} (capacity {self.max_sessions})")
