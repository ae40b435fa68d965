import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator, Optional, Protocol, Tuple

from chat_client import NetworkError, send_message
from message_formatter import format_message

logger = logging.getLogger(__name__)


class Sender(str, Enum):
    USER = "user"
    BOT = "bot"


@dataclass(frozen=True)
class Message:
    """A single transcript entry. Bot text is already formatted HTML."""

    sender: Sender
    text: str


class Transcript:
    """Append-only, ordered list of messages."""

    def __init__(self):
        self._messages = []

    def append(self, message: Message) -> None:
        self._messages.append(message)

    @property
    def messages(self) -> Tuple[Message, ...]:
        return tuple(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self.messages)

    def __len__(self) -> int:
        return len(self._messages)


class ChatView(Protocol):
    """Display surface the controller drives: an input field and a message list."""

    def read_input(self) -> str: ...

    def clear_input(self) -> None: ...

    def show(self, message: Message) -> None: ...

    def scroll_to_latest(self) -> None: ...


class TranscriptController:
    """
    Handles a submit: records the user's message, asks the backend for a
    reply and records the formatted reply (or an error notice).

    Submits are serialized, so at most one request is in flight per controller.
    """

    def __init__(
        self,
        view: ChatView,
        send: Callable[[str], str] = send_message,
        transcript: Optional[Transcript] = None,
    ):
        self.view = view
        self.send = send
        self.transcript = transcript if transcript is not None else Transcript()
        self._lock = threading.Lock()

    def submit(self) -> bool:
        """Process the current input. Returns False if there was nothing to send."""
        with self._lock:
            user_message = self.view.read_input().strip()
            if not user_message:
                return False

            self._append(Message(Sender.USER, user_message))
            self.view.clear_input()

            try:
                reply = self.send(user_message)
            except NetworkError as e:
                logger.error("Error sending message to backend: %s", e)
                self._append(Message(Sender.BOT, f"Sorry, something went wrong: {e}"))
            else:
                self._append(Message(Sender.BOT, format_message(reply)))
            return True

    def _append(self, message: Message) -> None:
        self.transcript.append(message)
        self.view.show(message)
        self.view.scroll_to_latest()
