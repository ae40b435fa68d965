import logging
import os

import requests
from dotenv import load_dotenv
from requests.exceptions import RequestException

load_dotenv()

CHAT_API_URL = os.getenv("CHAT_API_URL", "http://127.0.0.1:5000/api/chat")
REQUEST_TIMEOUT = float(os.getenv("CHAT_REQUEST_TIMEOUT", "60"))

logger = logging.getLogger(__name__)


class NetworkError(Exception):
    """Raised when the chat endpoint can't be reached or doesn't return a reply."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


def send_message(message, url=CHAT_API_URL, timeout=REQUEST_TIMEOUT):
    """
    Send a user message to the chat endpoint and return the bot's reply.

    :param message: Text typed by the user
    :param url: Chat endpoint URL
    :param timeout: Seconds to wait for the endpoint
    :return: Raw reply text
    :raises NetworkError: On transport failure, a non-2xx status or a malformed body
    """
    headers = {"Content-Type": "application/json"}
    logger.debug("POST %s", url)

    try:
        response = requests.post(url, json={"message": message}, headers=headers, timeout=timeout)
    except RequestException as e:
        raise NetworkError(str(e)) from e

    if not response.ok:
        raise NetworkError(_error_message(response), status_code=response.status_code)

    try:
        data = response.json()
    except ValueError as e:
        raise NetworkError("The chat endpoint returned an invalid response.") from e

    reply = data.get("reply") if isinstance(data, dict) else None
    if not isinstance(reply, str):
        raise NetworkError("The chat endpoint response did not include a reply.")
    return reply


def _error_message(response):
    # Prefer the reason given by the backend, fall back to the status code
    default_message = f"HTTP error! status: {response.status_code}"
    try:
        error_data = response.json()
    except ValueError:
        return default_message
    if not isinstance(error_data, dict):
        return default_message
    return error_data.get("reply") or error_data.get("message") or default_message
