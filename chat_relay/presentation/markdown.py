"""回复文本的展示转换。

present(text) 返回 (snippet, has_more, kind)：

- 文本中含有 ``` 围栏代码块时，kind 为 "code"，snippet 是第一个代码块的内容
  （去掉末尾空白），前端应按纯文本显示；
- 否则 kind 为 "html"，snippet 是 Markdown 转换得到的 HTML（先转义，避免注入）。

render(text) 只返回 (snippet, has_more)。has_more 目前恒为 False，
预留给以后的截断逻辑。
"""

import re
from typing import List, Tuple

FENCE_RE = re.compile(r"```[A-Za-z0-9+\-]*[ \t]*\r?\n([\s\S]*?)```")

SNIPPET_CODE = "code"
SNIPPET_HTML = "html"

# 已经是实体的 & 不再转义，保证 escape_html 幂等
_BARE_AMP_RE = re.compile(r"&(?!(?:#\d+|#[xX][0-9a-fA-F]+|[A-Za-z][A-Za-z0-9]*);)")

_HEADER_RE = re.compile(r"^(#{1,6})[ \t]+(.+?)[ \t]*$", re.MULTILINE)
_UL_ITEM_RE = re.compile(r"^[*\-+][ \t]+(.+)$")
_OL_ITEM_RE = re.compile(r"^\d+\.[ \t]+(.+)$")
_BLOCKQUOTE_RE = re.compile(r"^&gt;[ \t]*(.+)$", re.MULTILINE)
_BLOCK_LINE_RE = re.compile(r"^<(h[1-6]|ul|ol|blockquote)>")

_CODE_SPAN_RE = re.compile(r"(`+)(.+?)\1")
# 只为 http/https/mailto 生成链接，其余（如 javascript:）保留为文本
_LINK_RE = re.compile(r"\[([^\]\n]+?)\]\(((?:[Hh][Tt][Tt][Pp][Ss]?://|[Mm][Aa][Ii][Ll][Tt][Oo]:)[^)\s]+)\)")

_EMPHASIS_RULES = [
    (re.compile(r"\*\*(.+?)\*\*"), r"<strong>\1</strong>"),
    (re.compile(r"__(.+?)__"), r"<strong>\1</strong>"),
    (re.compile(r"\*(.+?)\*"), r"<em>\1</em>"),
    (re.compile(r"(?<!\w)_(.+?)_(?!\w)"), r"<em>\1</em>"),
    (re.compile(r"~~(.+?)~~"), r"<del>\1</del>"),
]

# 行内代码与链接先替换成占位符，强调规则不会改写其中的内容
_SLOT_OPEN = "\ue000"
_SLOT_CLOSE = "\ue001"
_SLOT_RE = re.compile(_SLOT_OPEN + r"(\d+)" + _SLOT_CLOSE)


def escape_html(text: str) -> str:
    text = _BARE_AMP_RE.sub("&amp;", text)
    return (
        text.replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#39;")
    )


def extract_code_block(text: str):
    """返回第一个围栏代码块的内容，没有则返回 None。"""
    match = FENCE_RE.search(text)
    if not match:
        return None
    return match.group(1).replace("\r\n", "\n").rstrip()


def _wrap_lists(text: str) -> str:
    """把连续的列表行合并成一个 <ul>/<ol>，整个列表占一行。"""
    out: List[str] = []
    items: List[str] = []
    kind = None

    def flush():
        nonlocal items, kind
        if items:
            out.append(f"<{kind}>" + "".join(f"<li>{i}</li>" for i in items) + f"</{kind}>")
        items, kind = [], None

    for line in text.split("\n"):
        ul = _UL_ITEM_RE.match(line)
        ol = None if ul else _OL_ITEM_RE.match(line)
        current = "ul" if ul else "ol" if ol else None
        if current is None:
            flush()
            out.append(line)
            continue
        if kind != current:
            flush()
            kind = current
        items.append((ul or ol).group(1))
    flush()
    return "\n".join(out)


def _emphasis(text: str) -> str:
    for pattern, repl in _EMPHASIS_RULES:
        text = pattern.sub(repl, text)
    return text


def _inline(text: str) -> str:
    slots: List[str] = []

    def stash(html: str) -> str:
        slots.append(html)
        return f"{_SLOT_OPEN}{len(slots) - 1}{_SLOT_CLOSE}"

    text = _CODE_SPAN_RE.sub(lambda m: stash(f"<code>{m.group(2).strip()}</code>"), text)
    text = _LINK_RE.sub(
        lambda m: stash(f'<a href="{m.group(2)}" target="_blank">{_emphasis(m.group(1))}</a>'),
        text,
    )
    text = _emphasis(text)
    return _SLOT_RE.sub(lambda m: slots[int(m.group(1))], text)


def _paragraphs(text: str) -> str:
    """空行分段，段内换行为 <br>；标题、列表、引用单独成块，不放进 <p>。"""
    out: List[str] = []
    para: List[str] = []

    def flush():
        if para:
            out.append("<p>" + "<br>".join(para) + "</p>")
            para.clear()

    for line in text.split("\n"):
        if _BLOCK_LINE_RE.match(line):
            flush()
            out.append(line)
        elif not line.strip():
            flush()
        else:
            para.append(line)
    flush()
    return "".join(out)


def markdown_to_html(text: str) -> str:
    if not text:
        return ""

    text = text.replace("\r\n", "\n").replace(_SLOT_OPEN, "").replace(_SLOT_CLOSE, "")
    text = escape_html(text)

    text = _HEADER_RE.sub(lambda m: f"<h{len(m.group(1))}>{m.group(2)}</h{len(m.group(1))}>", text)
    text = _wrap_lists(text)
    text = _BLOCKQUOTE_RE.sub(r"<blockquote>\1</blockquote>", text)
    text = re.sub(r"</blockquote>\n<blockquote>", "<br>", text)

    return _paragraphs(_inline(text))


def present(text: str) -> Tuple[str, bool, str]:
    has_more = False
    if not text:
        return "", has_more, SNIPPET_HTML
    code = extract_code_block(text)
    if code is not None:
        return code, has_more, SNIPPET_CODE
    return markdown_to_html(text), has_more, SNIPPET_HTML


def render(text: str) -> Tuple[str, bool]:
    snippet, has_more, _ = present(text)
    return snippet, has_more
