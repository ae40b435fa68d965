# Standard library imports
import logging
import os
from functools import lru_cache

# Third-party imports
from dotenv import load_dotenv
from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import ChatPromptTemplate
from langchain_openai import ChatOpenAI

load_dotenv()
MODEL_NAME = os.getenv("CHATBOT_MODEL", "gpt-4o")
TEMPERATURE = float(os.getenv("CHATBOT_TEMPERATURE", "0.7"))

logger = logging.getLogger(__name__)

# Replies are rendered by message_formatter, so keep the model to the markdown it understands
SYSTEM_PROMPT = (
    "You are a helpful assistant answering questions in a web chat. Follow these guidelines:\n"
    "1. Keep answers short and clear.\n"
    "2. Use **double asterisks** for emphasis and `backticks` for inline code.\n"
    "3. Put code in fenced blocks with a language tag, e.g. ```python.\n"
    "4. Use '* ' or '- ' for bullet lists. Do not nest lists.\n"
    "5. Do not use headings, tables, links or numbered lists."
)

# Chat prompt template
prompt = ChatPromptTemplate.from_messages([
    ("system", SYSTEM_PROMPT),
    ("human", "{input}"),
])


@lru_cache(maxsize=1)
def get_chain():
    """Build the prompt -> model -> text chain on first use."""
    logger.info("Initializing chat model %s", MODEL_NAME)
    model = ChatOpenAI(model=MODEL_NAME, temperature=TEMPERATURE)
    return prompt | model | StrOutputParser()


def response(user_input):
    """Return the model's reply to a single user message."""
    return get_chain().invoke({"input": user_input})
