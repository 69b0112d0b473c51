"""本地模板 Responder。

不调用任何外部 API：根据关键词选择一段多段落模板作为回复，
开场白和结束语从固定列表中随机挑选，只是为了让回复看起来不那么死板。
未配置 Gemini API key 时使用它。
"""

import random
import re

EMPTY_MESSAGE_REPLY = "Please enter a message so I can respond."

OPENINGS = (
    "Here's a concise answer:",
    "I can help with that. Summary:",
    "Sure, quick response:",
    "Got it. Here's what I suggest:",
)

CLOSINGS = (
    "Would you like a code sample or a step-by-step walkthrough?",
    "Shall I generate a concrete example for this?",
    "Do you want this expanded into runnable code?",
)

GREETING_RE = re.compile(r"\b(hi|hello|hey)\b")
CODE_RE = re.compile(r"(?<!\w)(code|c#|csharp|asp\.net|aspnet|dotnet|python|example|snippet)(?!\w)")
INTEGRATION_RE = re.compile(r"\b(gemini|google generative|generative language|api key)\b")
QUESTION_RE = re.compile(r"\b(how|what|why|when)\b")

ASPNET_SAMPLE = """// Minimal ASP.NET Core controller sample
public class HelloController : Microsoft.AspNetCore.Mvc.Controller
{
    [Microsoft.AspNetCore.Mvc.HttpGet("/hello")]
    public string Get() => "Hello from ASP.NET Core!";
}"""

CSHARP_SAMPLE = """// C# example: simple method
public static string Greet(string name)
{
    return $"Hello, {name}!";
}"""

PYTHON_SAMPLE = '''# Python example: simple function
def greet(name: str) -> str:
    return f"Hello, {name}!"'''

GENERIC_SAMPLE = """// Example pseudocode
function example() {
  // replace with your implementation
}"""


def code_sample(message: str) -> tuple[str, str]:
    """按关键词选择示例代码，返回 (语言标记, 代码)。"""
    m = message.lower()
    if any(k in m for k in ("asp.net", "aspnet", "mvc")):
        return "csharp", ASPNET_SAMPLE
    if any(k in m for k in ("c#", "csharp", "dotnet")):
        return "csharp", CSHARP_SAMPLE
    if "python" in m:
        return "python", PYTHON_SAMPLE
    return "", GENERIC_SAMPLE


class LocalResponder:
    """关键词 + 模板的本地回复生成器。"""

    name = "local"

    def __init__(self, rng=None):
        self._rng = rng or random.Random()

    def respond(self, message: str) -> str:
        if not message or not message.strip():
            return EMPTY_MESSAGE_REPLY

        m = message.strip()
        lower = m.lower()
        lines = [self._rng.choice(OPENINGS), ""]

        if GREETING_RE.search(lower):
            lines.append(
                "Hello! I'm your coding assistant. I can generate examples, explain concepts, or help debug."
            )

        if CODE_RE.search(lower):
            lang, sample = code_sample(lower)
            lines += [
                "Explanation:",
                "I detected you want code help. Here's a small sample you can try:",
                "",
                f"```{lang}",
                sample,
                "```",
                "",
                "Next steps:",
                "- Copy the snippet into a suitable project file and run it.",
                "- Tell me if you want it adapted to a specific scenario or framework.",
            ]
            return "\n".join(lines) + "\n"

        if INTEGRATION_RE.search(lower):
            lines += [
                "Integration guidance:",
                "1) Obtain an API key from Google AI Studio and enable the Generative Language API.",
                "2) Store the key securely, for example in the GEMINI_API_KEY environment variable or a .env file.",
                "3) Restart the app so the Gemini responder is selected.",
                "If you want, I can generate sample code to call the API.",
            ]
            return "\n".join(lines) + "\n"

        if m.endswith("?") or QUESTION_RE.search(lower):
            lines += [
                "Analysis:",
                f"You asked: '{m}'",
                "",
                "Short answer:",
                "- I recommend the following approach:",
                "  1) Break the problem into smaller steps.",
                "  2) Implement a minimal prototype and verify behavior.",
                "  3) Iterate and add error handling and tests.",
                "",
                "If you'd like, I can expand any step or generate example code.",
            ]
            return "\n".join(lines) + "\n"

        lines += [
            "Summary:",
            f"I understood: '{m}'.",
            "",
            "Suggestions:",
            "- Clarify the exact goal or provide an example input/output.",
            "- Ask me to generate a sample implementation or a step-by-step plan.",
            "",
            self._rng.choice(CLOSINGS),
        ]
        return "\n".join(lines) + "\n"
