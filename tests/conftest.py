"""Shared fixtures."""

import pytest

from transcript import Message


class FakeView:
    """In-memory ChatView that records what the controller does."""

    def __init__(self, value=""):
        self.value = value
        self.shown = []
        self.scrolls = 0

    def read_input(self):
        return self.value

    def clear_input(self):
        self.value = ""

    def show(self, message: Message):
        self.shown.append(message)

    def scroll_to_latest(self):
        self.scrolls += 1


@pytest.fixture
def view():
    return FakeView()
