"""Terminal chat client for the /api/chat endpoint."""

import logging
from functools import partial

import click

from chat_client import CHAT_API_URL, REQUEST_TIMEOUT, send_message
from transcript import Sender, TranscriptController

EXIT_COMMANDS = {"exit", "quit", "bye"}


class ConsoleView:
    """ChatView backed by stdin/stdout. The terminal scrolls on its own."""

    def __init__(self):
        self.pending = ""

    def prompt(self):
        self.pending = click.prompt("You", prompt_suffix=": ", default="", show_default=False)
        return self.pending

    def read_input(self):
        return self.pending

    def clear_input(self):
        self.pending = ""

    def show(self, message):
        # The user's own line is already on screen from the prompt
        if message.sender is Sender.BOT:
            click.echo(f"AI: {message.text}")

    def scroll_to_latest(self):
        pass


@click.command()
@click.option("--url", default=CHAT_API_URL, show_default=True, help="Chat endpoint URL.")
@click.option("--timeout", default=REQUEST_TIMEOUT, show_default=True, type=float,
              help="Seconds to wait for each reply.")
@click.option("--verbose", is_flag=True, help="Log requests and errors.")
def main(url, timeout, verbose):
    """Chat with the bot from the terminal."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING,
                        format="%(name)s - %(levelname)s - %(message)s")

    view = ConsoleView()
    controller = TranscriptController(view, send=partial(send_message, url=url, timeout=timeout))

    while True:
        try:
            user_input = view.prompt()
        except click.Abort:
            break
        if user_input.strip().lower() in EXIT_COMMANDS:
            break
        controller.submit()

    click.echo("Chat ended. Goodbye!")


if __name__ == "__main__":
    main()
