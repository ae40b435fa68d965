import html
import re

# Fenced code blocks: ```lang\nbody``` (the tag only counts when a newline follows it)
CODE_BLOCK_PATTERN = re.compile(r"```(?:(\w+)\n)?([\s\S]*?)```")
BOLD_PATTERN = re.compile(r"\*\*(.*?)\*\*")
INLINE_CODE_PATTERN = re.compile(r"`(.*?)`")
LIST_ITEM_PATTERN = re.compile(r"^(\s*)(\*|-)\s+(.*)")

BREAK_RUN_PATTERN = re.compile(r"(?:<br>\s*){2,}")
LEADING_BREAK_PATTERN = re.compile(r"\A<br\s*/?>\s*", re.IGNORECASE)
TRAILING_BREAK_PATTERN = re.compile(r"\s*<br\s*/?>\s*\Z", re.IGNORECASE)


def format_message(markdown_text):
    """
    Convert a bot reply written in a small markdown subset into HTML.

    Handles fenced code blocks, **bold**, `inline code`, unordered lists
    (``* item`` / ``- item``) and newlines. Anything else, including
    unmatched delimiters, is passed through as literal text.

    :param markdown_text: Raw reply text
    :return: HTML string
    """
    if not markdown_text:
        return ""

    sentinel = _sentinel_for(markdown_text)
    text, code_blocks = _protect_code_blocks(markdown_text, sentinel)

    text = BOLD_PATTERN.sub(r"<strong>\1</strong>", text)
    text = INLINE_CODE_PATTERN.sub(r"<code>\1</code>", text)
    text = "\n".join(_group_lists(text.split("\n")))
    text = text.replace("\n", "<br>")

    text = _restore_code_blocks(text, code_blocks, sentinel)
    return _clean_breaks(text)


def render_code_block(language, code):
    """Render a fenced block body as a <pre><code> element."""
    escaped_code = html.escape(code, quote=False).strip()
    language = (language or "").strip()
    if language:
        return f'<pre><code class="language-{language}">{escaped_code}</code></pre>'
    return f"<pre><code>{escaped_code}</code></pre>"


def _sentinel_for(text):
    # A run of NULs longer than any run already in the text can't collide with it
    longest_run = max((len(run) for run in re.findall("\x00+", text)), default=0)
    return "\x00" * (longest_run + 1)


def _protect_code_blocks(text, sentinel):
    code_blocks = []

    def _stash(match):
        code_blocks.append(render_code_block(match.group(1), match.group(2)))
        return f"{sentinel}{len(code_blocks) - 1}{sentinel}"

    return CODE_BLOCK_PATTERN.sub(_stash, text), code_blocks


def _restore_code_blocks(text, code_blocks, sentinel):
    if not code_blocks:
        return text
    # Trailing <br>s produced from the newlines after a block are dropped with it
    placeholder = re.compile(re.escape(sentinel) + r"(\d+)" + re.escape(sentinel) + r"(?:<br>)*")
    return placeholder.sub(lambda match: code_blocks[int(match.group(1))], text)


def _group_lists(lines):
    """Wrap each run of consecutive list-item lines in a single <ul>."""
    output = []
    list_indent = None  # None while outside a list

    for line in lines:
        item = LIST_ITEM_PATTERN.match(line)
        if item:
            if list_indent is None:
                list_indent = item.group(1)
                output.append(f"{list_indent}<ul>")
            output.append(f"{list_indent}  <li>{item.group(3)}</li>")
        else:
            if list_indent is not None:
                output.append(f"{list_indent}</ul>")
                list_indent = None
            output.append(line)

    if list_indent is not None:
        output.append(f"{list_indent}</ul>")
    return output


def _clean_breaks(text):
    text = text.replace("<li><br>", "<li>").replace("<br></li>", "</li>")
    text = text.replace("<ul><br>", "<ul>").replace("<br></ul>", "</ul>")
    text = BREAK_RUN_PATTERN.sub("<br><br>", text)
    text = LEADING_BREAK_PATTERN.sub("", text, count=1)
    return TRAILING_BREAK_PATTERN.sub("", text, count=1)
